"""Tests for the Template executor against recorded collaborators."""

import pytest

from vellum import Alias, LayoutNotFoundError, Template, TemplateRuntimeError
from vellum.environment.events import (
    AFTERPARTIAL,
    LAYOUT,
    PREPARTIAL,
    PRERENDER,
    RENDERED,
    RENDERLAYOUT,
)

from .helpers import FakeSectionStore, RecordingCommand, RecordingEngine


def _template(
    path: str = "/path",
    engine: RecordingEngine | None = None,
    command: RecordingCommand | None = None,
    sections: FakeSectionStore | None = None,
) -> Template:
    return Template(
        path,
        sections if sections is not None else FakeSectionStore(),
        engine if engine is not None else RecordingEngine(),
        command if command is not None else RecordingCommand(),
    )


class TestCall:
    """Helpers reached through call() and undefined attributes."""

    def test_undefined_attribute_runs_helper(self) -> None:
        command = RecordingCommand(run_results={"foo": "Foo!"})
        template = _template(command=command)

        assert template.foo("bar") == "Foo!"
        assert command.runs == [("foo", "bar")]

    def test_call_forwards_verbatim(self) -> None:
        command = RecordingCommand(run_results={"join": ["a", "b"]})
        template = _template(command=command)

        result = template.call("join", "a", 1, None)
        assert result == ["a", "b"]
        assert command.runs == [("join", "a", 1, None)]

    def test_helper_errors_propagate(self) -> None:
        class Exploding(RecordingCommand):
            def run(self, name, *args):
                raise ZeroDivisionError(name)

        template = _template(command=Exploding())
        with pytest.raises(ZeroDivisionError):
            template.broken()

    def test_private_names_are_not_helpers(self) -> None:
        template = _template()
        with pytest.raises(AttributeError):
            template._missing  # noqa: B018
        with pytest.raises(AttributeError):
            template.__deepcopy__  # noqa: B018

    def test_builtin_operation_wins_over_helper(self) -> None:
        command = RecordingCommand(run_results={"supply": "from helper"})
        template = _template(command=command)

        assert template.resolve("supply") == template.supply
        assert template.supply("missing") == ""
        assert command.runs == []


class TestFilter:
    """Filter pipelines fold left-to-right through Command.filter()."""

    def test_declining_stage_keeps_previous_value(self) -> None:
        command = RecordingCommand(filter_results=["foo", "bar", None, "baz"])
        template = _template(command=command)

        assert template.filter("first|foo|bar|baz", "Lorem Ipsum") == "baz"
        assert command.filters == [
            ("first", "Lorem Ipsum", []),
            ("foo", "foo", []),
            ("bar", "bar", []),
            ("baz", "bar", []),
        ]

    def test_args_are_matched_to_stages(self) -> None:
        command = RecordingCommand(filter_results=["Lorem!", "Ipsum!"])
        template = _template(command=command)

        result = template.filter("first|last", "Lorem Ipsum", [["foo"], ["bar"]])

        assert result == "Ipsum!"
        assert command.filters == [
            ("first", "Lorem Ipsum", ["foo"]),
            ("last", "Lorem!", ["bar"]),
        ]

    def test_missing_args_default_to_empty(self) -> None:
        command = RecordingCommand(filter_results=["A", "B"])
        template = _template(command=command)

        template.filter("one|two", "x", [["only-first"]])
        assert command.filters[1] == ("two", "A", [])

    def test_empty_string_declines(self) -> None:
        command = RecordingCommand(filter_results=["", "kept"])
        template = _template(command=command)

        assert template.filter("a|b", "value") == "kept"
        assert command.filters[1] == ("b", "value", [])

    def test_empty_pipeline_returns_value(self) -> None:
        command = RecordingCommand()
        template = _template(command=command)
        value = object()

        assert template.filter("", value) is value
        assert command.filters == []

    def test_empty_stage_keeps_argument_positions(self) -> None:
        command = RecordingCommand(filter_results=["A", "B"])
        template = _template(command=command)

        assert template.filter("a||b", "x", [["1"], ["2"], ["3"]]) == "B"
        assert command.filters == [("a", "x", ["1"]), ("b", "A", ["3"])]

    def test_stage_names_are_stripped(self) -> None:
        command = RecordingCommand(filter_results=["A", "B"])
        template = _template(command=command)

        template.filter(" trim | upper ", "x")
        assert [name for name, _, _ in command.filters] == ["trim", "upper"]


class TestRender:
    """The render state machine: events, buffer and layout."""

    def test_render_no_layout(self, write_template) -> None:
        path = write_template("foo.py", "echo(','.join(this.data().values()))")
        engine = RecordingEngine()
        template = _template(path, engine=engine)

        assert template.render({"a": "foo", "b": "bar"}) == "foo,bar"
        assert engine.fired == [(PRERENDER, template), (RENDERED, template)]
        assert template.last_buffer() == "foo,bar"

    def test_render_layout(self, write_template) -> None:
        path = write_template("foo.py", "echo(','.join(this.data().values()))")
        layout = write_template("bar.py", "echo('|'.join(this.data().values()))")
        engine = RecordingEngine(paths={"bar.inc": layout})
        template = _template(path, engine=engine)

        template.layout("bar.inc")
        assert template.render({"a": "foo", "b": "bar"}) == "foo|bar"
        assert template.last_buffer() == "foo,bar"

        own_events = [event for event in engine.fired if event[-1] is template]
        assert own_events == [
            (PRERENDER, template),
            (LAYOUT, layout, template),
            (RENDERLAYOUT, layout, template),
            (RENDERED, template),
        ]
        assert engine.renders == [(layout, {"a": "foo", "b": "bar"})]

    def test_rendered_fires_after_layout_chain(self, write_template) -> None:
        path = write_template("page.py", "this.layout('base')\necho('child')")
        layout = write_template("base.py", "echo('<', this.data('x'), '>')")
        engine = RecordingEngine(paths={"base": layout})
        template = _template(path, engine=engine)

        assert template.render({"x": 1}) == "<1>"
        names = engine.event_names()
        # The layout's own rendered event comes before the child's
        assert names == [PRERENDER, LAYOUT, PRERENDER, RENDERED, RENDERLAYOUT, RENDERED]
        assert engine.fired[-1] == (RENDERED, template)
        assert template.last_buffer() == "child"

    def test_layout_reads_child_buffer(self, write_template) -> None:
        path = write_template("page.py", "this.layout('base')\necho('child')")
        layout = write_template("base.py", "echo('[', this.last_buffer(), ']')")
        engine = RecordingEngine(paths={"base": layout})

        assert _template(path, engine=engine).render({}) == "[child]"

    def test_layout_fails_if_bad_file(self) -> None:
        engine = RecordingEngine()
        template = _template(engine=engine)

        with pytest.raises(LayoutNotFoundError):
            template.layout("foo")
        assert engine.finds == ["foo"]
        assert engine.fired == []

    def test_layout_error_is_invalid_argument(self) -> None:
        template = _template()
        with pytest.raises(ValueError):
            template.layout("foo")

    def test_bad_layout_in_body_aborts_render(self, write_template) -> None:
        path = write_template("page.py", "echo('partial output')\nthis.layout('nope')")
        engine = RecordingEngine()
        template = _template(path, engine=engine)

        with pytest.raises(LayoutNotFoundError):
            template.render({})
        assert engine.event_names() == [PRERENDER]
        assert template.last_buffer() == ""

    def test_rerender_overwrites_buffer(self, write_template) -> None:
        path = write_template("name.py", "echo(name)")
        template = _template(path)

        template.render({"name": "first"})
        assert template.render({"name": "second"}) == "second"
        assert template.last_buffer() == "second"
        assert template.context == {"name": "second"}

    def test_layout_does_not_leak_into_next_render(self, write_template) -> None:
        path = write_template("page.py", "echo('body')")
        layout = write_template("base.py", "echo('[', this.last_buffer(), ']')")
        engine = RecordingEngine(paths={"base": layout})
        template = _template(path, engine=engine)

        template.layout("base")
        template.render({})
        assert template.layout_path is None
        assert template.render({}) == "body"

    def test_body_errors_propagate(self, write_template) -> None:
        path = write_template("boom.py", "echo('before')\nraise KeyError('boom')")
        engine = RecordingEngine()
        template = _template(path, engine=engine)

        with pytest.raises(KeyError):
            template.render({})
        assert RENDERED not in engine.event_names()
        assert template.last_buffer() == ""

    def test_render_inside_own_body_is_rejected(self, write_template) -> None:
        path = write_template("loop.py", "this.render({})")
        template = _template(path)

        with pytest.raises(TemplateRuntimeError, match="already rendering"):
            template.render({})

    def test_context_entries_are_names(self, write_template) -> None:
        path = write_template("vars.py", "echo(title, ':', len(items))")
        template = _template(path)

        assert template.render({"title": "List", "items": [1, 2, 3]}) == "List:3"

    def test_reserved_names_shadow_context(self, write_template) -> None:
        path = write_template("reserved.py", "echo(type(this).__name__)")
        template = _template(path)

        assert template.render({"this": "nope", "echo": print}) == "Template"

    def test_echo_none_writes_nothing(self, write_template) -> None:
        path = write_template("none.py", "echo('a', None, 'b', 3)")
        assert _template(path).render() == "ab3"

    def test_echo_outside_render(self) -> None:
        with pytest.raises(TemplateRuntimeError):
            _template().echo("nope")


class TestSupply:
    """supply() reads finalized sections or falls back."""

    def test_supply(self) -> None:
        sections = FakeSectionStore({"foo": "Ok!"})
        template = _template(sections=sections)

        assert template.supply("foo") == "Ok!"
        assert sections.has_calls == ["foo"]
        assert sections.get_calls == ["foo"]

    def test_supply_default_string(self) -> None:
        assert _template().supply("foo", "Ok!") == "Ok!"

    def test_supply_no_default(self) -> None:
        assert _template().supply("foo") == ""

    def test_supply_default_callable(self) -> None:
        template = _template()
        received = []

        def fallback(section, tmpl):
            received.append((section, tmpl))
            return "Ok!"

        assert template.supply("foo", fallback) == "Ok!"
        assert received == [("foo", template)]

    def test_existing_section_ignores_default(self) -> None:
        template = _template(sections=FakeSectionStore({"foo": "stored"}))
        assert template.supply("foo", lambda *_: pytest.fail("default called")) == "stored"


class TestInsert:
    """Partials through insert() and insertif()."""

    def test_insert(self) -> None:
        engine = RecordingEngine(outputs={"foo": "Ok!"})
        template = _template(engine=engine)

        assert template.insert("foo", {"foo": "foo"}) == "Ok!"
        assert engine.fired == [
            (PREPARTIAL, "foo", {"foo": "foo"}, template),
            (AFTERPARTIAL, template),
        ]
        assert engine.renders == [("foo", {"foo": "foo"})]
        assert engine.finds == []

    def test_insert_empty_partial_still_fires(self) -> None:
        engine = RecordingEngine()
        template = _template(engine=engine)

        assert template.insert("ghost") == ""
        assert engine.event_names() == [PREPARTIAL, AFTERPARTIAL]
        assert engine.renders == [("ghost", {})]

    def test_insertif_does_nothing_if_file_not_exists(self) -> None:
        engine = RecordingEngine()
        template = _template(engine=engine)

        assert template.insertif("foo") == ""
        assert engine.finds == ["foo"]
        assert engine.fired == []
        assert engine.renders == []

    def test_insertif_renders_existing(self) -> None:
        engine = RecordingEngine(paths={"foo": "/t/foo.py"}, outputs={"foo": "Ok!"})
        template = _template(engine=engine)

        assert template.insertif("foo", {"a": 1}) == "Ok!"
        assert engine.renders == [("foo", {"a": 1})]
        assert engine.event_names() == [PREPARTIAL, AFTERPARTIAL]


class TestAlias:
    """Alias prefixes reach the same operations."""

    def test_alias_name_in_body(self, write_template) -> None:
        command = RecordingCommand(run_results={"v": "Foo!"})
        path = write_template("alias.py", "echo(T.v('foo'))")
        template = _template(path, command=command)
        template.set_alias(Alias("T"))

        assert template.render({}) == "Foo!"
        assert command.runs == [("v", "foo")]

    def test_prefixed_operation(self) -> None:
        template = _template(sections=FakeSectionStore({"x": "X!"}))
        template.set_alias(Alias("T"))

        assert template.Tsupply("x") == "X!"
        assert template.resolve("Tfilter") == template.filter

    def test_prefixed_unknown_name_is_helper(self) -> None:
        command = RecordingCommand(run_results={"Tnope": 1})
        template = _template(command=command)
        template.set_alias(Alias("T"))

        assert template.Tnope() == 1
        assert command.runs == [("Tnope",)]

    def test_without_alias_prefixed_name_is_helper(self) -> None:
        command = RecordingCommand()
        template = _template(command=command)

        template.Tsupply("x")
        assert command.runs == [("Tsupply", "x")]
