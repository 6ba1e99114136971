# testnet_client/codecs/template.py
"""Template codec: workflow request payload plus template metadata."""

from testnet_client.codecs import workflow as workflow_codec
from testnet_client.core.models import (
    ChainConfig,
    TemplateExecution,
    TemplateRun,
    TestnetWorkflowRequest,
    WorkflowState,
    WorkflowTemplate,
    WorkflowTemplateSummary,
)
from testnet_client.core.schemas import (
    WireCreateWorkflowTemplateRequest,
    WireExecuteWorkflowTemplateRequest,
    WireTemplateRun,
    WireUpdateWorkflowTemplateRequest,
    WireWorkflowTemplate,
    WireWorkflowTemplateSummary,
)


def create_request_to_wire(template: WorkflowTemplate) -> WireCreateWorkflowTemplateRequest:
    return WireCreateWorkflowTemplateRequest.build(
        id=template.template_id,
        description=template.description,
        template_config=workflow_codec.to_wire(template.config),
    )


def update_request_to_wire(template: WorkflowTemplate) -> WireUpdateWorkflowTemplateRequest:
    return WireUpdateWorkflowTemplateRequest.build(
        id=template.template_id,
        description=template.description,
        template_config=workflow_codec.to_wire(template.config),
    )


def execute_request_to_wire(execution: TemplateExecution) -> WireExecuteWorkflowTemplateRequest:
    # Stored templates already hold a wire-ready config; nothing to translate
    return WireExecuteWorkflowTemplateRequest.build(
        id=execution.template_id,
        sha=execution.sha,
        run_name=execution.run_name or "",
    )


def from_wire(wire: WireWorkflowTemplate) -> WorkflowTemplate:
    if wire.template_config is not None:
        config = workflow_codec.request_from_wire(wire.template_config)
    else:
        config = TestnetWorkflowRequest(repo="", sha="", chain_config=ChainConfig(name="", image=""))

    return WorkflowTemplate(
        template_id=wire.id,
        config=config,
        description=wire.description,
        created_at=wire.created_at,
        created_by=wire.created_by,
        run_count=wire.run_count or 0,
    )


def summary_from_wire(wire: WireWorkflowTemplateSummary) -> WorkflowTemplateSummary:
    return WorkflowTemplateSummary(
        template_id=wire.id,
        description=wire.description,
        created_at=wire.created_at,
        run_count=wire.run_count or 0,
    )


def run_from_wire(wire: WireTemplateRun) -> TemplateRun:
    return TemplateRun(
        run_id=wire.run_id,
        workflow_id=wire.workflow_id,
        template_id=wire.template_id,
        sha=wire.sha,
        run_name=wire.run_name,
        state=WorkflowState.parse(wire.status),
        started_at=wire.started_at,
        completed_at=wire.completed_at,
        monitoring_links=dict(wire.monitoring_links),
        provider=wire.provider,
    )
