from __future__ import annotations

from index.trigger_index import TriggerIndex
from parse.treesitter_parser import TreeSitterParser
from parse.treesitter_triggers import extract_runtime_triggers, extract_triggers

_COMPONENT = """\
export function Form({ store }) {
  const handleSubmit = () => {};
  const handleHover = () => {};
  return (
    <form onSubmit={handleSubmit}>
      <input onChange={store.update} onMouseEnter={handleHover} />
      <button onClick={() => handleSubmit()}>Save</button>
      <span onBlur="inline" />
    </form>
  );
}
"""


def _triggers(path: str, source: str, *props: str) -> list[tuple[str, str]]:
    parsed = TreeSitterParser().parse(path, source)
    assert parsed is not None
    entries = extract_triggers(parsed, props) if props else extract_triggers(parsed)
    return [(entry.function_name, entry.trigger) for entry in entries]


def test_event_props_bound_to_named_handlers_become_triggers() -> None:
    assert _triggers("Form.jsx", _COMPONENT) == [
        ("handleSubmit", "User interaction (onSubmit)"),
        ("update", "User interaction (onChange)"),
    ]


def test_tsx_components_are_scanned() -> None:
    assert _triggers("Form.tsx", _COMPONENT) == [
        ("handleSubmit", "User interaction (onSubmit)"),
        ("update", "User interaction (onChange)"),
    ]


def test_event_props_are_configurable() -> None:
    assert _triggers("Form.jsx", _COMPONENT, "onMouseEnter") == [
        ("handleHover", "User interaction (onMouseEnter)"),
    ]


def test_python_sources_have_no_triggers() -> None:
    assert _triggers("app.py", "def onClick():\n    pass\n") == []


def test_extract_runtime_triggers_rebuilds_index() -> None:
    parser = TreeSitterParser()
    first = parser.parse("Form.jsx", _COMPONENT)
    second = parser.parse("Empty.jsx", "export const Empty = () => <div />;\n")
    assert first is not None
    assert second is not None
    index = TriggerIndex()

    extract_runtime_triggers([first], index)
    total = extract_runtime_triggers([second], index)

    assert total == 0
    assert index.find("handleSubmit", "Form.jsx") is None
