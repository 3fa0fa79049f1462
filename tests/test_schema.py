import dataclasses

import pytest

from workflow.schema import (
    FieldOption,
    FieldProperty,
    FieldValidation,
    Flow,
    FlowTodoResult,
    Form,
    FormField,
    FormOperating,
    Node,
    NodeAssignment,
    NodeOperating,
    NodeProperty,
    NodeRouter,
    flow_tables,
)

TABLE_NAMES = [
    "f_flow",
    "f_node",
    "f_node_router",
    "f_node_assignment",
    "f_flow_instance",
    "f_node_instance",
    "f_node_timing",
    "f_node_candidate",
    "f_form",
    "f_form_field",
    "f_field_option",
    "f_field_property",
    "f_field_validation",
    "f_node_property",
]


def test_flow_tables_maps_names_to_classes():
    tables = flow_tables()
    assert tables["f_flow"] is Flow
    assert tables["f_node_router"] is NodeRouter
    assert tables["f_field_validation"] is FieldValidation


def test_flow_tables_covers_every_table_name():
    tables = flow_tables()
    assert set(tables) == set(TABLE_NAMES)
    assert len(set(tables.values())) == len(tables)


def test_flow_tables_first_and_last_order():
    names = list(flow_tables())
    assert names[0] == "f_flow"
    assert names[-1] == "f_node_property"


@pytest.mark.parametrize("table_name", TABLE_NAMES)
def test_table_classes_have_primary_key_id(table_name):
    cls = flow_tables()[table_name]
    instance = cls()
    fields = {f.name: f for f in dataclasses.fields(instance)}
    assert fields["id"].metadata.get("primary_key") is True
    assert instance.id == 0


def test_record_id_size_metadata():
    flow_cls = flow_tables()["f_flow"]
    flow = flow_cls(record_id="r1")
    fields = {f.name: f for f in dataclasses.fields(flow)}
    assert fields["record_id"].metadata["size"] == 36
    assert fields["xml"].metadata["size"] == 1024
    assert flow.record_id == "r1"


def test_dataclass_round_trip():
    flow = Flow(id=3, record_id="r1", code="c", name="n", status=1)
    assert Flow(**dataclasses.asdict(flow)) == flow


def test_todo_result_optional_form_fields_default_none():
    todo = FlowTodoResult(record_id="r")
    assert todo.form_type is None
    assert todo.form_data is None


def test_node_operating_all_order():
    n = Node(record_id="n")
    r = NodeRouter(record_id="r")
    a = NodeAssignment(record_id="a")
    p = NodeProperty(record_id="p")
    op = NodeOperating(
        node_group=[n], router_group=[r], assignment_group=[a], property_group=[p]
    )
    assert op.all() == [n, r, a, p]


def test_node_operating_all_empty():
    assert NodeOperating().all() == []


def test_form_operating_all_order():
    f = Form(record_id="f")
    ff1 = FormField(record_id="ff1")
    ff2 = FormField(record_id="ff2")
    o = FieldOption(record_id="o")
    p = FieldProperty(record_id="p")
    v = FieldValidation(record_id="v")
    op = FormOperating(
        form_group=[f],
        form_field_group=[ff1, ff2],
        field_option_group=[o],
        field_property_group=[p],
        field_validation_group=[v],
    )
    assert op.all() == [f, ff1, ff2, o, p, v]


def test_operating_groups_are_independent():
    a = NodeOperating()
    b = NodeOperating()
    a.node_group.append(Node())
    assert b.node_group == []
    assert b.all() == []