"""HTTP contract of the API: verbs, paths and argument validators.

Clients use these to build requests; the routers in ``api/v1`` serve them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from ipfs_ens_api.core.validators import is_deploy_args, is_login_args
from ipfs_ens_api.models.deployment import new_deploy_args
from ipfs_ens_api.models.responses import LoginArgs

API_BASE_PATH = "/v1"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


class RootResource(str, Enum):
    DEPLOYMENT = "deployment"
    LOGIN = "login"


PRIVATE_BASE_PATH = f"{API_BASE_PATH}/{RootResource.DEPLOYMENT.value}"
AUTH_BASE_PATH = f"{API_BASE_PATH}/{RootResource.LOGIN.value}"


def deploy_path(name: str) -> str:
    return f"{PRIVATE_BASE_PATH}/{name}"


@dataclass(frozen=True)
class Contract:
    """One API operation."""

    http: HttpMethod
    path: str | Callable[[str], str]
    is_args: Callable[[Any], bool] | None = None
    new_args: Callable[[], Any] | None = None

    def url(self, name: str | None = None) -> str:
        if callable(self.path):
            if name is None:
                raise ValueError("this operation needs a deployment name")
            return self.path(name)
        return self.path


CreateDeployment = Contract(
    http=HttpMethod.POST,
    path=deploy_path,
    is_args=is_deploy_args,
    new_args=new_deploy_args,
)

ReadDeployment = Contract(http=HttpMethod.GET, path=deploy_path)

ListDeployments = Contract(http=HttpMethod.GET, path=PRIVATE_BASE_PATH)

Login = Contract(
    http=HttpMethod.POST,
    path=AUTH_BASE_PATH,
    is_args=is_login_args,
    new_args=lambda: LoginArgs(code=""),
)
