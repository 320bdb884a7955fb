from typing import Any, Optional, Type, TypeVar
from urllib.parse import quote

from pydantic import BaseModel

from ..executor import RequestDescriptor, RequestExecutor
from ..models import MailBreezeModel

ParamsT = TypeVar("ParamsT", bound=MailBreezeModel)


def path_segment(value: str) -> str:
    """Escape an id for use as a single path segment"""
    value = str(value)
    if not value:
        raise ValueError("Resource id must not be empty")
    return quote(value, safe="")


def coerce_params(params_class: Type[ParamsT], params: Optional[ParamsT], fields: dict) -> ParamsT:
    """Accept either a ready-made params model or the keyword fields to build one, not both"""
    if params is not None:
        if fields:
            raise TypeError(f"Pass either a {params_class.__name__} or keyword fields, not both")
        if not isinstance(params, params_class):
            raise TypeError(f"Expected {params_class.__name__}, got {type(params).__name__}")
        return params
    return params_class(**fields)


class Resource:
    """Base class for API resources. Builds request descriptors and hands them to the executor."""
    base_path: str = ""

    def __init__(self, executor: RequestExecutor):
        self._executor = executor

    def __repr__(self):
        return f"{type(self).__name__}(base_path={self.base_path!r})"

    def _path(self, *segments: str) -> str:
        return "/".join([self.base_path] + [path_segment(s) for s in segments])

    async def _request(self,
                       method: str,
                       path: str,
                       *,
                       query: Optional[MailBreezeModel] = None,
                       body: Any = None,
                       response_model: Optional[Type[BaseModel]] = None):
        if isinstance(body, MailBreezeModel):
            body = body.to_payload()
        params = tuple(query.to_payload().items()) if query is not None else ()
        descriptor = RequestDescriptor(method=method, path=path, params=params, body=body)
        return await self._executor.execute(descriptor, response_model=response_model)
