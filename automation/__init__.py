"""
Automation workflow templates (n8n JSON).
"""

from .workflow_templates import (
    WorkflowTemplateGenerator,
    WorkflowTemplate,
    WorkflowNode,
    Connection,
    TEMPLATE_BUILDERS,
    generate_workflow_template,
    timestamp_seed,
)

__all__ = [
    "WorkflowTemplateGenerator",
    "WorkflowTemplate",
    "WorkflowNode",
    "Connection",
    "TEMPLATE_BUILDERS",
    "generate_workflow_template",
    "timestamp_seed",
]
