"""
Tests for the schema walker and source parser.

Tests validate:
- Parse failures surface as ParseError with a location
- Function lookup is exact and ignores methods
- The Schema map entries come out in source order
- Structural surprises above field level are MISMATCH, never exceptions
"""

import pytest

try:
    import tree_sitter_language_pack  # noqa: F401
    TREE_SITTER_AVAILABLE = True
except ImportError:
    TREE_SITTER_AVAILABLE = False

requires_tree_sitter = pytest.mark.skipif(
    not TREE_SITTER_AVAILABLE,
    reason="tree-sitter-language-pack not installed"
)

from tfsnip.core.errors import ParseError
from tfsnip.core.parsing import SchemaPattern, WalkStatus, find_function, walk_schema

from tests.factories import go_resource


# =============================================================================
# SourceParser
# =============================================================================

@requires_tree_sitter
class TestSourceParser:
    """Parsing Go sources."""

    def test_parses_valid_source(self, go_factory, example_source):
        unit = go_factory.parse(example_source)
        assert unit.root.type == "source_file"
        assert unit.source == example_source.encode("utf-8")

    def test_syntax_error_raises(self, go_factory):
        with pytest.raises(ParseError) as exc:
            go_factory.parse("package x\n\nfunc broken( {\n")
        assert "syntax error" in str(exc.value)

    def test_parse_error_has_location(self, go_factory, tmp_path):
        path = go_factory.write("resource_bad.go", "package x\n\nfunc ( {\n")
        with pytest.raises(ParseError) as exc:
            go_factory.parser.parse_file(path)
        assert str(path) in str(exc.value)

    def test_missing_file_raises(self, go_factory, tmp_path):
        with pytest.raises(ParseError) as exc:
            go_factory.parser.parse_file(tmp_path / "nope.go")
        assert "cannot read" in str(exc.value)

    def test_oversized_file_raises(self, go_factory):
        from tfsnip.core.parsing import LanguageConfig, SourceParser

        tiny = LanguageConfig(name="Go", tree_sitter_name="go", max_file_size=10)
        with pytest.raises(ParseError) as exc:
            SourceParser(tiny).parse(b"package example\n")
        assert "limit" in str(exc.value)

    def test_parser_reused(self, go_factory, example_source):
        parser = go_factory.parser
        parser.parse(example_source.encode())
        first = parser._parser
        parser.parse(example_source.encode())
        assert parser._parser is first


# =============================================================================
# find_function
# =============================================================================

@requires_tree_sitter
class TestFindFunction:
    """Declaration lookup."""

    def test_finds_exact_name(self, go_factory, example_source):
        unit = go_factory.parse(example_source)
        assert find_function(unit, "resourceExampleThing") is not None

    def test_no_partial_match(self, go_factory, example_source):
        unit = go_factory.parse(example_source)
        assert find_function(unit, "resourceExample") is None
        assert find_function(unit, "resourceExampleThingX") is None

    def test_case_sensitive(self, go_factory, example_source):
        unit = go_factory.parse(example_source)
        assert find_function(unit, "ResourceExampleThing") is None

    def test_methods_are_not_candidates(self, go_factory):
        source = (
            "package example\n\n"
            "type T struct{}\n\n"
            "func (t *T) resourceExampleThing() int {\n\treturn 1\n}\n"
        )
        unit = go_factory.parse(source)
        assert find_function(unit, "resourceExampleThing") is None


# =============================================================================
# walk_schema
# =============================================================================

@requires_tree_sitter
class TestWalkSchema:
    """Descending into the Schema map."""

    def test_entries_in_source_order(self, go_factory, example_source):
        unit = go_factory.parse(example_source)
        walk = walk_schema(unit, "resourceExampleThing")

        assert walk.status == WalkStatus.MATCHED
        assert [f.name for f in walk.fields] == ["name", "id", "tags"]

    def test_entry_lines(self, go_factory, example_source):
        unit = go_factory.parse(example_source)
        walk = walk_schema(unit, "resourceExampleThing")
        name_line = example_source.splitlines().index('\t\t\t"name": &schema.Schema{') + 1
        assert walk.fields[0].line == name_line

    def test_function_not_found_is_empty_not_error(self, go_factory, example_source):
        unit = go_factory.parse(example_source)
        walk = walk_schema(unit, "resourceSomethingElse")

        assert walk.status == WalkStatus.FUNCTION_NOT_FOUND
        assert walk.fields == []
        assert walk.matched

    def test_no_schema_field_gives_no_entries(self, go_factory):
        source = (
            "package example\n\n"
            "func resourceEmpty() *schema.Resource {\n"
            "\treturn &schema.Resource{\n\t\tCreate: create,\n\t}\n}\n"
        )
        walk = walk_schema(go_factory.parse(source), "resourceEmpty")
        assert walk.status == WalkStatus.MATCHED
        assert walk.fields == []

    def test_statements_before_return_ignored(self, go_factory):
        source = (
            "package example\n\n"
            "func resourceLate() *schema.Resource {\n"
            "\tx := 1\n"
            "\t_ = x\n"
            "\treturn &schema.Resource{\n"
            "\t\tSchema: map[string]*schema.Schema{\n"
            '\t\t\t"a": &schema.Schema{Type: schema.TypeString},\n'
            "\t\t},\n"
            "\t}\n}\n"
        )
        walk = walk_schema(go_factory.parse(source), "resourceLate")
        assert walk.status == WalkStatus.MATCHED
        assert [f.name for f in walk.fields] == ["a"]

    def test_raw_string_keys(self, go_factory):
        source = go_resource("resourceRaw", '''
            `raw_name`: &schema.Schema{Type: schema.TypeString},
        ''')
        walk = walk_schema(go_factory.parse(source), "resourceRaw")
        assert [f.name for f in walk.fields] == ["raw_name"]

    def test_non_literal_key_has_no_name(self, go_factory):
        source = go_resource("resourceConstKey", '''
            nameKey: &schema.Schema{Type: schema.TypeString},
            "plain": &schema.Schema{Type: schema.TypeString},
        ''')
        walk = walk_schema(go_factory.parse(source), "resourceConstKey")
        assert walk.status == WalkStatus.MATCHED
        assert [f.name for f in walk.fields] == [None, "plain"]

    def test_custom_schema_field(self, go_factory):
        source = (
            "package example\n\n"
            "func resourceAlt() *schema.Resource {\n"
            "\treturn &schema.Resource{\n"
            "\t\tFields: map[string]*schema.Schema{\n"
            '\t\t\t"a": &schema.Schema{Type: schema.TypeString},\n'
            "\t\t},\n"
            "\t}\n}\n"
        )
        unit = go_factory.parse(source)
        assert walk_schema(unit, "resourceAlt").fields == []
        walk = walk_schema(unit, "resourceAlt", SchemaPattern(schema_field="Fields"))
        assert [f.name for f in walk.fields] == ["a"]


@requires_tree_sitter
class TestWalkMismatch:
    """Unexpected structure is reported, not raised."""

    def test_no_return_statement(self, go_factory):
        source = 'package example\n\nfunc resourceNoReturn() *schema.Resource {\n\tpanic("x")\n}\n'
        walk = walk_schema(go_factory.parse(source), "resourceNoReturn")

        assert walk.status == WalkStatus.MISMATCH
        assert not walk.matched
        assert "no return statement" in walk.reason

    def test_return_of_call(self, go_factory):
        source = (
            "package example\n\n"
            "func resourceDelegates() *schema.Resource {\n"
            "\treturn resourceOther()\n}\n"
        )
        walk = walk_schema(go_factory.parse(source), "resourceDelegates")

        assert walk.status == WalkStatus.MISMATCH
        assert "call_expression" in walk.reason
        assert walk.line == 4

    def test_schema_built_by_function(self, go_factory):
        source = (
            "package example\n\n"
            "func resourceShared() *schema.Resource {\n"
            "\treturn &schema.Resource{\n"
            "\t\tSchema: sharedSchema(),\n"
            "\t}\n}\n"
        )
        walk = walk_schema(go_factory.parse(source), "resourceShared")

        assert walk.status == WalkStatus.MISMATCH
        assert "Schema" in walk.reason

    def test_positional_outer_literal(self, go_factory):
        source = (
            "package example\n\n"
            "func resourcePositional() *T {\n"
            "\treturn &T{1, 2}\n}\n"
        )
        walk = walk_schema(go_factory.parse(source), "resourcePositional")
        assert walk.status == WalkStatus.MISMATCH
        assert "keyed element" in walk.reason
