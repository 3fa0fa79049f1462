# workflow

Building blocks for a workflow (business process) application: a data
model, SQL helpers, a form renderer and a small toolkit for expressions
and templates. It has no dependencies outside the standard library.

## Modules

- `workflow.schema`: dataclasses for flows, nodes, routers, assignments,
  properties, instances, timings, candidates, forms, form fields and their
  options, properties and validations, plus query result records
  (`FlowQueryResult`, `FlowTodoResult`, `FlowHistoryResult`,
  `FlowDoneResult`, `FlowInstanceResult`). `flow_tables()` maps each table
  name (for example `f_flow`, `f_node`) to its record class.
  `NodeOperating.all()` and `FormOperating.all()` return every record of a
  batch in a fixed order.
- `workflow.util`: `new_uuid()` returns a random UUID string.
  `struct_to_map(obj)` turns a dataclass record into a dictionary.
  `string_to_int(s)` parses a signed 64-bit decimal integer and raises
  `ValueError` on anything else, `"1.0"` included.
- `workflow.db`: `DB(connection, trace=False)` wraps a DB-API connection
  that uses the `?` parameter style. It builds and runs statements from
  dictionaries: `insert_sql` / `insert`, `update_sql` / `update_by_pk` and
  `delete_sql` / `delete_by_pk`. `expand_in(query, *args)` expands each
  list or tuple argument into one placeholder per element.
  `transaction()` is a context manager that commits on success and rolls
  back on error. Statements outside it are committed at once. With
  `trace=True` each statement is logged through the `logging` module.
- `workflow.render`: `Renderer` is the abstract base, and `IonicRenderer`
  renders a form as an Ionic HTML page returned as bytes. The form is any
  object with a `fields` list. Each field has `id`, `type` and `label`.
  `enum` fields also have `values`, each with `id` and `name`. Fields of
  type `string`, `long`, `date`, `enum` and `boolean` are rendered, and all
  other types are skipped. The script URL is set with
  `IonicRenderer(script_url=...)`.
- `workflow.qlang.operators`: typed operators for an expression language,
  covering arithmetic (`add`, `sub`, `mul`, `quo`, `mod`, `neg`, `inc`,
  `dec`), bit operations (`lshr`, `rshr`, `xor`, `bit_and`, `bit_or`,
  `bit_not`, `and_not`), comparison and logic (`lt`, `gt`, `le`, `ge`,
  `eq`, `ne`, `not_`), `max_of` / `min_of`, and conversions (`to_float`,
  `to_int`, `to_string`, `to_bool`). Integers wrap at 64 bits, integer
  division truncates toward zero, and operands of the wrong type raise
  `UnsupportedOperation`.
- `workflow.qlang.containers`: map and slice built-ins (`map_from`, `get`,
  `set_items`, `set_index`, `delete`, `length`, `capacity`, `sub_slice`,
  `append`, `slice_from`, `panicf`). They raise `QlangPanic` on bad input.
  Reading a missing map key gives the `UNDEFINED` marker, and storing
  `UNDEFINED` deletes the key.
- `workflow.qlang.mathlib`: `mod(a, b)` (floating remainder), `cast_float`
  and a `CONSTANTS` table (`e`, `pi`, `phi`, `Inf`, `NaN`).
- `workflow.qlang.stdlib`: `md5_hash(sep, *args)`, `md5_sumstr`,
  `sha1_sumstr`, `bytes_from`, `new_buffer`, `json_pretty` and
  `json_unmarshal`. `json_unmarshal` decodes numbers as floats.
- `workflow.qlang.eqlang`: templates with `<% code %>` blocks,
  `<%= expr %>` output and `$name` substitution. `parse(source)` turns a
  template into script code. `subst(text, variables)` replaces `$name` and
  `$$`. `parse_input` and `input_file` read JSON variables. `EqlEngine`
  renders templates, single files or whole directories through an
  interpreter that you supply.

## Install

    pip install .

For the tests:

    pip install .[test]
    pytest

## Examples

Build SQL from a dictionary:

    import sqlite3
    from workflow.db import DB

    db = DB(sqlite3.connect(":memory:"), trace=False)
    query, values = db.insert_sql("f_flow", {"code": "leave", "name": "Leave"})
    # "INSERT INTO f_flow(code,name) VALUES(?,?)", ["leave", "Leave"]

    query, values = db.expand_in("SELECT * FROM f_node WHERE id IN (?)", [1, 2, 3])
    # "SELECT * FROM f_node WHERE id IN (?, ?, ?)", [1, 2, 3]

Substitute variables in text:

    from workflow.qlang.eqlang import subst

    subst("?$Writer!$", {"Writer": "abc"})   # "?abc!$"
    subst("$$$Writer", {"Writer": 123})      # "$123"

Hash several values joined by a separator:

    from workflow.qlang.stdlib import md5_hash, md5_sumstr

    md5_hash(",", "a", "b", b"c") == md5_sumstr(b"a,b,c")   # True

Typed operators raise `UnsupportedOperation` on mismatched operands:

    from workflow.qlang.operators import add, UnsupportedOperation

    add(1, 2.5)        # 3.5
    add("a", "b")      # "ab"
    add("a", 1)        # raises UnsupportedOperation

## What it does not do

- It has no flow engine. Nothing here starts flow instances, evaluates
  routes or assigns tasks. `workflow.schema` only describes the records.
- It has no HTTP server or API, and no command-line program.
- It does not create tables or manage a database. `DB` only runs the
  statements it builds on a connection that you open.
- It has no script interpreter. `eqlang.parse` produces script code, and
  `EqlEngine` needs an object with `get_var`, `set_var`, `reset_vars` and
  `safe_exec` to run it.