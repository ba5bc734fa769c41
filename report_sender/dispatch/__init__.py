"""Downstream workflow trigger.

Public API:
    build_dispatch_request(target, handle, provenance) -> DispatchRequest
    create_workflow_dispatch(token, request, api_url) -> None
"""

from report_sender.dispatch.client import build_dispatch_request, create_workflow_dispatch
from report_sender.dispatch.types import DEFAULT_TARGET, DispatchRequest, DispatchTarget

__all__ = [
    "DEFAULT_TARGET",
    "DispatchRequest",
    "DispatchTarget",
    "build_dispatch_request",
    "create_workflow_dispatch",
]
