"""Workflow data model: flows, nodes, instances and forms, with their table names."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

FLOW_TABLE_NAME = "f_flow"
NODE_TABLE_NAME = "f_node"
NODE_ROUTER_TABLE_NAME = "f_node_router"
NODE_ASSIGNMENT_TABLE_NAME = "f_node_assignment"
NODE_PROPERTY_TABLE_NAME = "f_node_property"
FLOW_INSTANCE_TABLE_NAME = "f_flow_instance"
NODE_INSTANCE_TABLE_NAME = "f_node_instance"
NODE_TIMING_TABLE_NAME = "f_node_timing"
NODE_CANDIDATE_TABLE_NAME = "f_node_candidate"
FORM_TABLE_NAME = "f_form"
FORM_FIELD_TABLE_NAME = "f_form_field"
FIELD_OPTION_TABLE_NAME = "f_field_option"
FIELD_PROPERTY_TABLE_NAME = "f_field_property"
FIELD_VALIDATION_TABLE_NAME = "f_field_validation"


def _pk() -> Any:
    """Auto-incrementing integer primary key column."""
    return field(default=0, metadata={"primary_key": True, "autoincrement": True})


def _str(size: Optional[int] = None) -> Any:
    return field(default="", metadata={"size": size} if size else {})


@dataclass
class Flow:
    """A flow definition (flag 1: main flow, 2: sub flow; status 1: normal, 2: disabled)."""

    id: int = _pk()
    record_id: str = _str(36)
    code: str = _str(50)
    name: str = _str(50)
    version: int = 0
    type_code: str = _str(50)
    xml: str = _str(1024)
    memo: str = _str(255)
    flag: int = 0
    parent_id: str = _str(36)
    status: int = 0
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class Node:
    """A node of a flow."""

    id: int = _pk()
    record_id: str = _str(36)
    flow_id: str = _str(36)
    code: str = _str(50)
    name: str = _str(50)
    type_code: str = _str(50)
    order_num: str = _str(10)
    form_id: str = _str(36)
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class NodeRouter:
    """A route between two nodes, guarded by a boolean expression."""

    id: int = _pk()
    record_id: str = _str(36)
    source_node_id: str = _str(36)
    target_node_id: str = _str(36)
    expression: str = _str(1024)
    explain: str = _str(255)
    is_default_target: int = 0
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class NodeAssignment:
    """An expression that selects who a node is assigned to."""

    id: int = _pk()
    record_id: str = _str(36)
    node_id: str = _str(36)
    expression: str = _str(1024)
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class NodeProperty:
    """A named property of a node."""

    id: int = _pk()
    record_id: str = _str(36)
    node_id: str = _str(36)
    name: str = _str(50)
    value: str = _str(255)
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class FlowInstance:
    """A running flow (status 0: not started, 1: running, 2: paused, 3: stopped, 9: done)."""

    id: int = _pk()
    record_id: str = _str(36)
    flow_id: str = _str(36)
    status: int = 0
    launcher: str = _str(36)
    launch_time: int = 0
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class NodeInstance:
    """A node reached by a flow instance (status 1: pending, 2: done)."""

    id: int = _pk()
    record_id: str = _str(36)
    flow_instance_id: str = _str(36)
    node_id: str = _str(36)
    processor: str = _str(36)
    process_time: int = 0
    input_data: str = _str(1024)
    out_data: str = _str(1024)
    status: int = 0
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class NodeTiming:
    """A timer attached to a node instance."""

    id: int = _pk()
    node_instance_id: str = _str()
    flag: str = _str()
    processor: str = _str(36)
    input: str = _str(1024)
    expired_at: int = 0
    created: int = 0
    deleted: int = 0


@dataclass
class NodeCandidate:
    """A candidate processor of a node instance."""

    id: int = _pk()
    record_id: str = _str(36)
    node_instance_id: str = _str(36)
    candidate_id: str = _str(36)
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class Form:
    """A flow form (type URL: link to a form, META: form metadata)."""

    id: int = _pk()
    record_id: str = _str(36)
    flow_id: str = _str(36)
    code: str = _str(50)
    name: str = _str(50)
    type_code: str = _str(50)
    data: str = _str(1024)
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class FormField:
    """A field of a form."""

    id: int = _pk()
    record_id: str = _str(36)
    form_id: str = _str(36)
    code: str = _str(50)
    label: str = _str(50)
    type_code: str = _str(50)
    default_value: str = _str(100)
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class FieldOption:
    """A selectable option of a form field."""

    id: int = _pk()
    record_id: str = _str(36)
    field_id: str = _str(36)
    value_id: str = _str(50)
    value_name: str = _str(100)
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class FieldProperty:
    """A property of a form field."""

    id: int = _pk()
    record_id: str = _str(36)
    field_id: str = _str(36)
    code: str = _str(50)
    value: str = _str(100)
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class FieldValidation:
    """A validation constraint on a form field."""

    id: int = _pk()
    record_id: str = _str(36)
    field_id: str = _str(36)
    constraint_name: str = _str(50)
    constraint_config: str = _str(100)
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass
class FlowQueryParam:
    """Filters for querying flows."""

    code: str = ""
    name: str = ""
    type_code: str = ""
    status: int = 0


@dataclass
class FlowQueryResult:
    """A row of a flow query."""

    id: int = 0
    record_id: str = ""
    code: str = ""
    name: str = ""
    version: int = 0
    type_code: str = ""
    status: int = 0
    created: int = 0
    memo: str = ""


@dataclass
class FlowTodoResult:
    """A pending node instance for a user."""

    record_id: str = ""
    flow_instance_id: str = ""
    flow_name: str = ""
    node_id: str = ""
    node_code: str = ""
    node_name: str = ""
    input_data: str = ""
    launcher: str = ""
    launch_time: int = 0
    form_type: Optional[str] = None
    form_data: Optional[str] = None


@dataclass
class FlowHistoryResult:
    """A processed step in the history of a flow instance."""

    record_id: str = ""
    node_id: str = ""
    node_code: str = ""
    node_name: str = ""
    processor: str = ""
    process_time: int = 0
    input_data: str = ""
    out_data: str = ""
    status: int = 0
    form_type: Optional[str] = None
    form_data: Optional[str] = None


@dataclass
class FlowDoneResult:
    """A node instance already handled by a user."""

    record_id: str = ""
    flow_instance_id: str = ""
    flow_name: str = ""
    flow_status: int = 0
    process_time: int = 0
    node_id: str = ""
    node_name: str = ""
    out_data: str = ""
    launcher: str = ""
    launch_time: int = 0
    form_type: Optional[str] = None
    form_data: Optional[str] = None


@dataclass
class FlowInstanceResult:
    """A flow instance joined with its flow's code and name."""

    id: int = 0
    record_id: str = ""
    flow_id: str = ""
    status: int = 0
    launcher: str = ""
    launch_time: int = 0
    flow_code: str = ""
    flow_name: str = ""


@dataclass
class NodeOperating:
    """Node records to be written together."""

    node_group: list[Node] = field(default_factory=list)
    router_group: list[NodeRouter] = field(default_factory=list)
    assignment_group: list[NodeAssignment] = field(default_factory=list)
    property_group: list[NodeProperty] = field(default_factory=list)

    def all(self) -> list[Any]:
        """Return nodes, routers, assignments and properties, in that order."""
        return [
            *self.node_group,
            *self.router_group,
            *self.assignment_group,
            *self.property_group,
        ]


@dataclass
class FormOperating:
    """Form records to be written together."""

    form_group: list[Form] = field(default_factory=list)
    form_field_group: list[FormField] = field(default_factory=list)
    field_option_group: list[FieldOption] = field(default_factory=list)
    field_property_group: list[FieldProperty] = field(default_factory=list)
    field_validation_group: list[FieldValidation] = field(default_factory=list)

    def all(self) -> list[Any]:
        """Return forms, fields, options, properties and validations, in that order."""
        return [
            *self.form_group,
            *self.form_field_group,
            *self.field_option_group,
            *self.field_property_group,
            *self.field_validation_group,
        ]


def flow_tables() -> dict[str, type]:
    """Map each workflow table name to the record class stored in it."""
    return {
        FLOW_TABLE_NAME: Flow,
        NODE_TABLE_NAME: Node,
        NODE_ROUTER_TABLE_NAME: NodeRouter,
        NODE_ASSIGNMENT_TABLE_NAME: NodeAssignment,
        FLOW_INSTANCE_TABLE_NAME: FlowInstance,
        NODE_INSTANCE_TABLE_NAME: NodeInstance,
        NODE_TIMING_TABLE_NAME: NodeTiming,
        NODE_CANDIDATE_TABLE_NAME: NodeCandidate,
        FORM_TABLE_NAME: Form,
        FORM_FIELD_TABLE_NAME: FormField,
        FIELD_OPTION_TABLE_NAME: FieldOption,
        FIELD_PROPERTY_TABLE_NAME: FieldProperty,
        FIELD_VALIDATION_TABLE_NAME: FieldValidation,
        NODE_PROPERTY_TABLE_NAME: NodeProperty,
    }