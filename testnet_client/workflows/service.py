#testnet_client\workflows\service.py

"""Workflow services - validate, encode, call the provisioning service, decode."""

import logging
from typing import List, Tuple

from testnet_client.codecs import load_test as load_test_codec
from testnet_client.codecs import template as template_codec
from testnet_client.codecs import workflow as workflow_codec
from testnet_client.core.models import (
    LoadTestSpec,
    TemplateExecution,
    TemplateRun,
    TestnetWorkflowRequest,
    WorkflowResponse,
    WorkflowStatus,
    WorkflowSummary,
    WorkflowTemplate,
    WorkflowTemplateSummary,
)
from testnet_client.core.schemas import (
    WireCancelWorkflowRequest,
    WireGetTemplateRunHistoryRequest,
    WireGetWorkflowRequest,
    WireListWorkflowsRequest,
    WireListWorkflowTemplatesRequest,
    WireRunLoadTestRequest,
    WireSignalWorkflowRequest,
    WireTemplateIdRequest,
)
from testnet_client.core.validation import LoadTestValidator, validate_workflow_request
from testnet_client.rpc.client import IronbirdRpcClient

logger = logging.getLogger(__name__)


SHUTDOWN_SIGNAL = "shutdown"
DEFAULT_WORKFLOW_PAGE_SIZE = 100
DEFAULT_TEMPLATE_PAGE_SIZE = 50


class WorkflowService:
    """Workflow lifecycle against the remote provisioning service."""

    def __init__(self, client: IronbirdRpcClient):
        self._client = client

    # ============================================
    # SUBMISSION
    # ============================================

    def create_workflow(self, request: TestnetWorkflowRequest) -> WorkflowResponse:
        """
        Validate and submit a workflow request.

        Nothing is sent when validation fails.

        Raises:
            ValidationError: Request or embedded load test spec rejected
            SerializationError: A value can't be encoded
            TransportError: The call failed
        """
        validate_workflow_request(request)
        wire = workflow_codec.to_wire(request)

        logger.info(f"Creating workflow for {request.repo}@{request.sha}")
        response = self._client.create_workflow(wire)

        logger.info(f"Workflow created: {response.workflow_id} ({response.status})")
        return workflow_codec.response_from_wire(response)

    def run_load_test(self, workflow_id: str, spec: LoadTestSpec) -> WorkflowResponse:
        """Start a load test against an existing workflow's network."""
        checked = LoadTestValidator.check(spec)
        request = WireRunLoadTestRequest(
            workflow_id=workflow_id,
            load_test_spec=load_test_codec.to_wire(checked),
        )

        logger.info(f"Running load test {spec.name!r} on workflow {workflow_id}")
        return workflow_codec.response_from_wire(self._client.run_load_test(request))

    # ============================================
    # QUERIES
    # ============================================

    def get_workflow(self, workflow_id: str) -> WorkflowStatus:
        response = self._client.get_workflow(WireGetWorkflowRequest(workflow_id=workflow_id))
        return workflow_codec.from_wire(response)

    def list_workflows(
        self,
        limit: int = DEFAULT_WORKFLOW_PAGE_SIZE,
        offset: int = 0,
    ) -> Tuple[List[WorkflowSummary], int]:
        """List workflow summaries. Returns (summaries, total count)."""
        response = self._client.list_workflows(WireListWorkflowsRequest.build(limit=limit, offset=offset))
        summaries = [workflow_codec.summary_from_wire(w) for w in response.workflows]
        return summaries, response.count

    # ============================================
    # CONTROL
    # ============================================

    def cancel_workflow(self, workflow_id: str) -> WorkflowResponse:
        logger.info(f"Cancelling workflow {workflow_id}")
        response = self._client.cancel_workflow(WireCancelWorkflowRequest(workflow_id=workflow_id))
        return workflow_codec.response_from_wire(response)

    def signal_workflow(self, workflow_id: str, signal_name: str) -> WorkflowResponse:
        logger.info(f"Sending signal {signal_name!r} to workflow {workflow_id}")
        response = self._client.signal_workflow(
            WireSignalWorkflowRequest(workflow_id=workflow_id, signal_name=signal_name)
        )
        return workflow_codec.response_from_wire(response)

    def send_shutdown_signal(self, workflow_id: str) -> WorkflowResponse:
        """Ask a long-running testnet to tear itself down."""
        return self.signal_workflow(workflow_id, SHUTDOWN_SIGNAL)


class TemplateService:
    """Reusable workflow templates and their executions."""

    def __init__(self, client: IronbirdRpcClient):
        self._client = client

    # ============================================
    # TEMPLATES
    # ============================================

    def create_template(self, template: WorkflowTemplate) -> str:
        """
        Store a new template. Returns the template id.

        The embedded request is validated the same way a direct submission is.
        """
        validate_workflow_request(template.config)
        response = self._client.create_workflow_template(
            template_codec.create_request_to_wire(template)
        )
        logger.info(f"Template created: {response.id}")
        return response.id

    def update_template(self, template: WorkflowTemplate) -> str:
        validate_workflow_request(template.config)
        response = self._client.update_workflow_template(
            template_codec.update_request_to_wire(template)
        )
        logger.info(f"Template updated: {response.id}")
        return response.id

    def get_template(self, template_id: str) -> WorkflowTemplate:
        response = self._client.get_workflow_template(WireTemplateIdRequest(id=template_id))
        return template_codec.from_wire(response)

    def list_templates(
        self,
        limit: int = DEFAULT_TEMPLATE_PAGE_SIZE,
        offset: int = 0,
    ) -> Tuple[List[WorkflowTemplateSummary], int]:
        response = self._client.list_workflow_templates(
            WireListWorkflowTemplatesRequest.build(limit=limit, offset=offset)
        )
        return [template_codec.summary_from_wire(t) for t in response.templates], response.count

    def delete_template(self, template_id: str) -> None:
        logger.info(f"Deleting template {template_id}")
        self._client.delete_workflow_template(WireTemplateIdRequest(id=template_id))

    # ============================================
    # EXECUTIONS
    # ============================================

    def execute_template(self, execution: TemplateExecution) -> WorkflowResponse:
        logger.info(f"Executing template {execution.template_id} at {execution.sha}")
        response = self._client.execute_workflow_template(
            template_codec.execute_request_to_wire(execution)
        )
        return workflow_codec.response_from_wire(response)

    def get_run_history(
        self,
        template_id: str,
        limit: int = DEFAULT_TEMPLATE_PAGE_SIZE,
        offset: int = 0,
    ) -> Tuple[List[TemplateRun], int]:
        response = self._client.get_template_run_history(
            WireGetTemplateRunHistoryRequest.build(id=template_id, limit=limit, offset=offset)
        )
        return [template_codec.run_from_wire(r) for r in response.runs], response.count
