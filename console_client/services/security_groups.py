from console_client.config import API_PATHS
from console_client.models import (
    SecurityGroupCreateRequest,
    SecurityGroupRuleCreateRequest,
    SecurityGroupUpdateRequest,
)
from console_client.services.base import BaseService, coerce

GROUPS = API_PATHS["SECURITY_GROUPS"]
RULES = API_PATHS["SECURITY_GROUP_RULES"]


class SecurityGroupService(BaseService):
    def list(self) -> list:
        return self._request(
            "GET", GROUPS["BASE"],
            action="fetching security groups", endpoint="security groups",
        )

    def create(self, data) -> dict:
        return self._request(
            "POST", GROUPS["BASE"],
            action="creating security group", endpoint="create security group",
            body=coerce(SecurityGroupCreateRequest, data),
        )

    def update(self, security_group_id: str, data) -> dict:
        return self._request(
            "PUT", GROUPS["BASE"], security_group_id,
            action="updating security group", endpoint="update security group",
            body=coerce(SecurityGroupUpdateRequest, data),
        )

    def delete(self, security_group_id: str) -> dict:
        return self._request(
            "DELETE", GROUPS["BASE"], security_group_id,
            action="deleting security group", endpoint="delete security group",
        )

    def list_rules(self, security_group_id: str) -> list:
        return self._request(
            "GET", GROUPS["BASE"], security_group_id, "rules",
            action="fetching security group rules", endpoint="security group rules",
        )

    def add_rule(self, data) -> dict:
        request = coerce(SecurityGroupRuleCreateRequest, data)
        return self._request(
            "POST", GROUPS["BASE"], request.security_group_id, "rules",
            action="adding security group rule", endpoint="add security group rule",
            body=request.model_dump(exclude={"security_group_id"}, exclude_none=True),
        )

    def delete_rule(self, rule_id: str) -> dict:
        return self._request(
            "DELETE", RULES["BASE"], rule_id,
            action="deleting security group rule", endpoint="delete security group rule",
        )
