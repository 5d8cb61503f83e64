"""
Console gateway.

Flask app serving the admin console's session and resource routes on top of
console_client. Browser cookies are read and written through FlaskCookieStore.
"""
