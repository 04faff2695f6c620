"""
Pre-built automation workflow templates.

Emits n8n workflow graphs (nodes + connections) for the orchestrator to
import. Templates are disposable scaffolding selected by a type key.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from config.settings import Settings, get_settings
from lead_scoring.exceptions import InvalidConfig, InvalidInput, describe

logger = logging.getLogger(__name__)

IdSeed = Callable[[], Union[int, str]]


def timestamp_seed() -> int:
    """Wall-clock milliseconds; two calls in the same millisecond collide."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class WorkflowNode:
    """A single node in an n8n workflow."""
    id: str
    name: str
    type: str
    type_version: float
    position: Tuple[int, int]
    parameters: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "typeVersion": self.type_version,
            "position": list(self.position),
            "parameters": dict(self.parameters),
        }


@dataclass(frozen=True)
class Connection:
    """Edge to a target node input."""
    node: str
    type: str = "main"
    index: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"node": self.node, "type": self.type, "index": self.index}


@dataclass
class WorkflowTemplate:
    """Complete workflow definition."""
    name: str
    nodes: List[WorkflowNode]
    connections: Dict[str, List[Connection]]  # source node name -> targets

    def node(self, name: str) -> Optional[WorkflowNode]:
        for node in self.nodes:
            if node.name == name:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to n8n workflow JSON."""
        return {
            "name": self.name,
            "nodes": [node.to_dict() for node in self.nodes],
            "connections": {
                source: {"main": [[target.to_dict() for target in targets]]}
                for source, targets in self.connections.items()
            },
        }


def get_follow_up_template(name: str, seed: Union[int, str]) -> WorkflowTemplate:
    """Follow-up: manual start, wait three days, send email."""
    return WorkflowTemplate(
        name=f"Generated: {name}",
        nodes=[
            WorkflowNode(
                id=f"trigger-{seed}",
                name="Start",
                type="n8n-nodes-base.manualTrigger",
                type_version=1,
                position=(240, 300),
            ),
            WorkflowNode(
                id=f"wait-{seed}",
                name="Wait Period",
                type="n8n-nodes-base.wait",
                type_version=1.1,
                position=(460, 300),
                parameters={"amount": 3, "unit": "days"},
            ),
            WorkflowNode(
                id=f"action-{seed}",
                name="Send Follow-up",
                type="n8n-nodes-base.emailSend",
                type_version=2.1,
                position=(680, 300),
            ),
        ],
        connections={
            "Start": [Connection(node="Wait Period")],
            "Wait Period": [Connection(node="Send Follow-up")],
        },
    )


def get_notification_template(name: str, seed: Union[int, str]) -> WorkflowTemplate:
    """Notification: webhook in, HTTP POST out."""
    return WorkflowTemplate(
        name=f"Generated: {name}",
        nodes=[
            WorkflowNode(
                id=f"trigger-{seed}",
                name="Webhook",
                type="n8n-nodes-base.webhook",
                type_version=2,
                position=(240, 300),
                parameters={"path": "notify", "httpMethod": "POST"},
            ),
            WorkflowNode(
                id=f"notify-{seed}",
                name="Send Notification",
                type="n8n-nodes-base.httpRequest",
                type_version=4.2,
                position=(460, 300),
                parameters={"method": "POST"},
            ),
        ],
        connections={
            "Webhook": [Connection(node="Send Notification")],
        },
    )


TEMPLATE_BUILDERS: Dict[str, Callable[[str, Union[int, str]], WorkflowTemplate]] = {
    "follow-up": get_follow_up_template,
    "notification": get_notification_template,
}


class WorkflowTemplateGenerator:
    """
    Builds workflow templates by type key.

    Unknown type keys fall back to the default type ("follow-up"). Node ids
    are suffixed with a seed from ``id_seed`` so repeated calls produce
    distinct ids; inject a fixed seed for deterministic output.
    """

    def __init__(self, id_seed: Optional[IdSeed] = None, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        if settings.default_workflow_type not in TEMPLATE_BUILDERS:
            raise InvalidConfig(f"Unknown default workflow type: {settings.default_workflow_type}")

        self.default_type = settings.default_workflow_type
        self._id_seed = id_seed or timestamp_seed

    def available_types(self) -> List[str]:
        return list(TEMPLATE_BUILDERS)

    def generate(self, name: str, workflow_type: str = "follow-up") -> WorkflowTemplate:
        """
        Generate a workflow template.

        Args:
            name: Workflow name (emitted as "Generated: <name>")
            workflow_type: Template key; unknown keys use the default type

        Raises:
            InvalidInput: name is not a string
        """
        if not isinstance(name, str):
            raise InvalidInput(f"workflow name must be a string, got {describe(name)}")

        builder = TEMPLATE_BUILDERS.get(workflow_type) if isinstance(workflow_type, str) else None
        if builder is None:
            logger.debug(f"Unknown workflow type {workflow_type!r}, using {self.default_type}")
            builder = TEMPLATE_BUILDERS[self.default_type]

        return builder(name, self._id_seed())


def generate_workflow_template(name: str, workflow_type: str = "follow-up") -> Dict[str, Any]:
    """Generate n8n workflow JSON for a template type."""
    return WorkflowTemplateGenerator().generate(name, workflow_type).to_dict()
