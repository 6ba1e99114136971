#testnet_client\container.py

"""Dependency injection container - wires settings, client and services together."""

from testnet_client.rpc.client import IronbirdRpcClient
from testnet_client.rpc.config import ClientSettings
from testnet_client.workflows.service import TemplateService, WorkflowService


# ============================================
# CONFIG
# ============================================

settings = ClientSettings()


# ============================================
# CLIENT
# ============================================

rpc_client = IronbirdRpcClient(settings=settings)


# ============================================
# SERVICES
# ============================================

workflow_service = WorkflowService(client=rpc_client)

template_service = TemplateService(client=rpc_client)
