# testnet_client/rpc/client.py
"""Client for the Ironbird provisioning service (Connect unary JSON over HTTP)."""

import logging
from typing import Optional, Tuple, Type, TypeVar

import requests
from pydantic import ValidationError

from testnet_client.core.errors import TransportError
from testnet_client.core.schemas import (
    WireCancelWorkflowRequest,
    WireCreateWorkflowRequest,
    WireCreateWorkflowTemplateRequest,
    WireExecuteWorkflowTemplateRequest,
    WireGetTemplateRunHistoryRequest,
    WireGetWorkflowRequest,
    WireListWorkflowsRequest,
    WireListWorkflowTemplatesRequest,
    WireModel,
    WireRunLoadTestRequest,
    WireSignalWorkflowRequest,
    WireTemplateIdRequest,
    WireTemplateRunHistoryResponse,
    WireUpdateWorkflowTemplateRequest,
    WireWorkflow,
    WireWorkflowListResponse,
    WireWorkflowResponse,
    WireWorkflowTemplate,
    WireWorkflowTemplateListResponse,
    WireWorkflowTemplateResponse,
)
from testnet_client.rpc.config import ClientSettings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=WireModel)

HEADERS = {
    "Content-Type": "application/json",
    "Connect-Protocol-Version": "1",
}


class IronbirdRpcClient:
    """Client for the remote provisioning service. One call, one attempt."""

    def __init__(self, settings: ClientSettings, session: Optional[requests.Session] = None):
        """
        Initialize client.

        Args:
            settings: Endpoint address, service name and timeout
            session: HTTP session to reuse (a new one is created if omitted)
        """
        self._settings = settings
        self._session = session or requests.Session()
        self.timeout = settings.request_timeout_seconds

    @property
    def base_url(self) -> str:
        return self._settings.grpc_address.rstrip("/")

    def close(self) -> None:
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # -------------------------
    # TRANSPORT
    # -------------------------

    def _call(self, method: str, request: WireModel, response_model: Type[T]) -> T:
        """
        Invoke one RPC method.

        Args:
            method: Service method name, e.g. "CreateWorkflow"
            request: Wire request object
            response_model: Wire schema of the expected response

        Returns:
            Parsed wire response

        Raises:
            TransportError: On network failure, non-200 status or a
                malformed response body
        """
        url = self._settings.method_url(method)
        logger.info(f"RPC request: {method} {url}")

        try:
            response = self._session.post(
                url,
                json=request.to_wire(),
                headers=HEADERS,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"RPC {method} timed out after {self.timeout}s")
            raise TransportError(
                f"{method} timed out after {self.timeout}s",
                code="deadline_exceeded",
                method=method,
            ) from e
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Cannot connect to {self.base_url}: {e}")
            raise TransportError(str(e), code="unavailable", method=method) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"RPC {method} failed: {e}")
            raise TransportError(str(e), code="unknown", method=method) from e

        if response.status_code != 200:
            code, message = _error_details(response)
            logger.error(f"RPC {method} error [{response.status_code}] {code}: {message}")
            raise TransportError(message, code=code, method=method)

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(f"{method} returned a non-JSON body", code="internal", method=method) from e

        try:
            result = response_model.model_validate(payload)
        except ValidationError as e:
            raise TransportError(f"{method} returned a malformed response: {e}", code="internal", method=method) from e

        logger.debug(f"RPC response: {method} {payload}")
        return result

    # -------------------------
    # WORKFLOWS
    # -------------------------

    def create_workflow(self, request: WireCreateWorkflowRequest) -> WireWorkflowResponse:
        return self._call("CreateWorkflow", request, WireWorkflowResponse)

    def get_workflow(self, request: WireGetWorkflowRequest) -> WireWorkflow:
        return self._call("GetWorkflow", request, WireWorkflow)

    def list_workflows(self, request: WireListWorkflowsRequest) -> WireWorkflowListResponse:
        return self._call("ListWorkflows", request, WireWorkflowListResponse)

    def cancel_workflow(self, request: WireCancelWorkflowRequest) -> WireWorkflowResponse:
        return self._call("CancelWorkflow", request, WireWorkflowResponse)

    def signal_workflow(self, request: WireSignalWorkflowRequest) -> WireWorkflowResponse:
        return self._call("SignalWorkflow", request, WireWorkflowResponse)

    def run_load_test(self, request: WireRunLoadTestRequest) -> WireWorkflowResponse:
        return self._call("RunLoadTest", request, WireWorkflowResponse)

    # -------------------------
    # TEMPLATES
    # -------------------------

    def create_workflow_template(
        self, request: WireCreateWorkflowTemplateRequest
    ) -> WireWorkflowTemplateResponse:
        return self._call("CreateWorkflowTemplate", request, WireWorkflowTemplateResponse)

    def get_workflow_template(self, request: WireTemplateIdRequest) -> WireWorkflowTemplate:
        return self._call("GetWorkflowTemplate", request, WireWorkflowTemplate)

    def list_workflow_templates(
        self, request: WireListWorkflowTemplatesRequest
    ) -> WireWorkflowTemplateListResponse:
        return self._call("ListWorkflowTemplates", request, WireWorkflowTemplateListResponse)

    def update_workflow_template(
        self, request: WireUpdateWorkflowTemplateRequest
    ) -> WireWorkflowTemplateResponse:
        return self._call("UpdateWorkflowTemplate", request, WireWorkflowTemplateResponse)

    def delete_workflow_template(self, request: WireTemplateIdRequest) -> WireWorkflowTemplateResponse:
        return self._call("DeleteWorkflowTemplate", request, WireWorkflowTemplateResponse)

    def execute_workflow_template(
        self, request: WireExecuteWorkflowTemplateRequest
    ) -> WireWorkflowResponse:
        return self._call("ExecuteWorkflowTemplate", request, WireWorkflowResponse)

    def get_template_run_history(
        self, request: WireGetTemplateRunHistoryRequest
    ) -> WireTemplateRunHistoryResponse:
        return self._call("GetTemplateRunHistory", request, WireTemplateRunHistoryResponse)


def _error_details(response: requests.Response) -> Tuple[str, str]:
    """Extract (code, message) from a Connect error body, falling back to raw text."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        return str(body.get("code", "unknown")), str(body["message"])

    return "unknown", response.text or response.reason or f"HTTP {response.status_code}"
