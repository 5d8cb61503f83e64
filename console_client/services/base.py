from typing import Any, Type, TypeVar

from pydantic import BaseModel

from console_client.transport import ApiClient

M = TypeVar("M", bound=BaseModel)


def coerce(model: Type[M], data: Any) -> M:
    """Validate a mapping into a request model; models pass through."""
    if isinstance(data, model):
        return data
    return model.model_validate(data)


class BaseService:
    def __init__(self, client: ApiClient):
        self.client = client

    def _request(self, method: str, path: str, *path_params: Any, **kwargs) -> Any:
        return self.client.request(method, path, *path_params, **kwargs)
