"""Tests for documentation field extraction."""

import pytest

from apidoc.comments.extractor import (
    get_example,
    get_exceptions,
    get_param,
    get_remarks,
    get_returns,
    get_see_alsos,
    get_sees,
    get_summary,
    get_type_parameter,
)
from apidoc.comments.models import (
    CommentParseError,
    CrefInfo,
    ParserContext,
    ReferenceCollector,
)

SAMPLE_COMMENT = """<member name="M:Sample.Calculator.Divide(System.Int32,System.Int32)">
    <summary>
    Divides <paramref name="dividend"/> by <paramref name="divisor"/>
    using <see cref="T:System.Math"/>.
    </summary>
    <remarks>
    <para>Integer division.</para>
    <para>See also <seealso cref="M:Sample.Calculator.Multiply(System.Int32,System.Int32)"/>.</para>
    </remarks>
    <typeparam name="T">The numeric type.</typeparam>
    <param name="dividend">The number to divide.</param>
    <param name="divisor">The number to divide by; never <see langword="null"/>.</param>
    <returns>The quotient.</returns>
    <example>
    <code>
    var q = calc.Divide(6, 3);
    </code>
    </example>
    <exception cref="T:System.DivideByZeroException">
    Thrown when <paramref name="divisor"/> is zero.
    </exception>
    <exception cref="!:OverflowException">Never bound.</exception>
    <see cref="T:Sample.Calculator"/>
    <seealso cref="T:Sample.Math">The math helpers</seealso>
</member>"""


@pytest.fixture
def collector() -> ReferenceCollector:
    return ReferenceCollector()


@pytest.fixture
def context(collector: ReferenceCollector) -> ParserContext:
    return ParserContext(reference_sink=collector)


class TestSingleNodeFields:
    """Tests for summary, remarks, example and returns."""

    def test_summary_resolves_see(self, context: ParserContext) -> None:
        xml = '<member><summary> Hello <see cref="T:A.B"/> world </summary></member>'
        assert get_summary(xml, context) == "Hello @'A.B' world"

    def test_summary_sample(
        self, context: ParserContext, collector: ReferenceCollector
    ) -> None:
        assert get_summary(SAMPLE_COMMENT, context) == (
            "Divides *dividend* by *divisor*\nusing @'System.Math'."
        )
        assert collector.references == ["System.Math"]

    def test_remarks_keep_nested_markup(self, context: ParserContext) -> None:
        assert get_remarks(SAMPLE_COMMENT, context) == (
            "<para>Integer division.</para>\n"
            "<para>See also @'Sample.Calculator.Multiply(System.Int32,System.Int32)'.</para>"
        )

    def test_returns(self, context: ParserContext) -> None:
        assert get_returns(SAMPLE_COMMENT, context) == "The quotient."

    def test_example_code_lines_trimmed(self, context: ParserContext) -> None:
        assert get_example(SAMPLE_COMMENT, context) == (
            "<code>\nvar q = calc.Divide(6, 3);\n</code>"
        )

    def test_missing_field(self, context: ParserContext) -> None:
        xml = "<member><summary>s</summary></member>"
        assert get_remarks(xml, context) is None
        assert get_returns(xml, context) is None
        assert get_example(xml, context) is None

    def test_empty_field(self, context: ParserContext) -> None:
        assert get_summary("<member><summary/></member>", context) == ""

    def test_without_normalization(self) -> None:
        context = ParserContext(normalize=False)
        xml = "<member><summary>\n    a\n    b\n</summary></member>"
        assert get_summary(xml, context) == "\n    a\n    b\n"

    def test_preserve_raw_inline_comments(
        self, collector: ReferenceCollector
    ) -> None:
        context = ParserContext(
            preserve_raw_inline_comments=True, reference_sink=collector
        )
        xml = '<member><summary>a <see cref="T:A"/></summary></member>'
        assert get_summary(xml, context) == 'a <see cref="T:A"/>'
        assert collector.references == []

    def test_invalid_cref_leaks_into_output(self, context: ParserContext) -> None:
        xml = '<member><summary>a <see cref="!:Bad"/></summary></member>'
        assert get_summary(xml, context) == 'a <see cref="!:Bad"/>'

    def test_default_context(self) -> None:
        xml = '<member><summary>\n  a <see cref="T:A"/>\n</summary></member>'
        assert get_summary(xml) == "a @'A'"

    def test_empty_input(self, context: ParserContext) -> None:
        assert get_summary("", context) is None
        assert get_summary(None, context) is None


class TestSingleNodeErrors:
    """Malformed XML on the single-node path."""

    def test_malformed_returns_none(self, context: ParserContext) -> None:
        assert get_summary("<member><summary>", context) is None

    def test_malformed_raises_without_handler(self, context: ParserContext) -> None:
        with pytest.raises(CommentParseError):
            get_summary("<member><summary>", context, error_handler=None)

    def test_custom_error_handler(self, context: ParserContext) -> None:
        errors: list[Exception] = []

        def handler(error: Exception) -> str:
            errors.append(error)
            return "fallback"

        assert get_remarks("<member><remarks>", context, error_handler=handler) == "fallback"
        assert len(errors) == 1

    def test_badly_formed_comment(self, context: ParserContext) -> None:
        xml = '<!-- Badly formed XML comment ignored for member "M:A.B" -->'
        assert get_summary(xml, context) is None


class TestParameters:
    """Tests for param and typeparam lookup."""

    def test_param_with_paramref(self, context: ParserContext) -> None:
        xml = '<member><param name="x"> some <paramref name="x"/> text </param></member>'
        assert get_param(xml, "x", context) == "some *x* text"

    def test_param_by_name(self, context: ParserContext) -> None:
        assert get_param(SAMPLE_COMMENT, "dividend", context) == "The number to divide."
        assert get_param(SAMPLE_COMMENT, "divisor", context) == (
            'The number to divide by; never <see langword="null"/>.'
        )

    def test_unknown_param(self, context: ParserContext) -> None:
        assert get_param(SAMPLE_COMMENT, "missing", context) is None

    def test_param_name_with_quote(self, context: ParserContext) -> None:
        xml = """<member><param name="it's">Quoted</param></member>"""
        assert get_param(xml, "it's", context) == "Quoted"

    def test_param_see_scoped_to_param(
        self, context: ParserContext, collector: ReferenceCollector
    ) -> None:
        xml = (
            '<member><param name="a">A <see cref="T:A"/></param>'
            '<param name="b">B <see cref="T:B"/></param></member>'
        )
        assert get_param(xml, "b", context) == "B @'B'"
        assert collector.references == ["B"]

    def test_empty_name_skips_parsing(self, context: ParserContext) -> None:
        """An empty name returns None even for input that would not parse."""
        assert get_param("<member><param>", "", context, error_handler=None) is None
        assert get_param(SAMPLE_COMMENT, None, context) is None

    def test_type_parameter(self, context: ParserContext) -> None:
        assert get_type_parameter(SAMPLE_COMMENT, "T", context) == "The numeric type."
        assert get_type_parameter(SAMPLE_COMMENT, "U", context) is None

    def test_type_parameter_empty_name(self, context: ParserContext) -> None:
        assert get_type_parameter("<member><typeparam>", "", context, error_handler=None) is None


class TestCrefLists:
    """Tests for exception, see and seealso lists."""

    def test_exceptions(
        self, context: ParserContext, collector: ReferenceCollector
    ) -> None:
        assert get_exceptions(SAMPLE_COMMENT, context) == [
            CrefInfo(
                type="System.DivideByZeroException",
                description="Thrown when *divisor* is zero.",
            )
        ]
        assert collector.references == ["System.DivideByZeroException"]

    def test_sees(self, context: ParserContext) -> None:
        assert get_sees(SAMPLE_COMMENT, context) == [
            CrefInfo(type="Sample.Calculator", description=None)
        ]

    def test_see_alsos(self, context: ParserContext) -> None:
        assert get_see_alsos(SAMPLE_COMMENT, context) == [
            CrefInfo(type="Sample.Math", description="The math helpers")
        ]

    def test_document_order(self, context: ParserContext) -> None:
        xml = (
            '<member><see cref="T:B"/><see cref="!:Bad"/>'
            '<see cref="T:A">a</see><see cref="T:C"/></member>'
        )
        assert [info.type for info in get_sees(xml, context)] == ["B", "A", "C"]

    def test_nested_see_in_description(
        self, context: ParserContext, collector: ReferenceCollector
    ) -> None:
        xml = (
            '<member><exception cref="T:E">When <see cref="T:X"/> fails'
            "</exception></member>"
        )
        assert get_exceptions(xml, context) == [
            CrefInfo(type="E", description="When @'X' fails")
        ]
        assert collector.references == ["X", "E"]

    def test_description_without_normalization(self) -> None:
        context = ParserContext(normalize=False)
        xml = '<member><exception cref="T:E">\n  boom\n</exception></member>'
        assert get_exceptions(xml, context) == [
            CrefInfo(type="E", description="\n  boom\n")
        ]

    def test_no_matches_is_none(self, context: ParserContext) -> None:
        xml = "<member><summary>s</summary></member>"
        assert get_exceptions(xml, context) is None
        assert get_sees(xml, context) is None
        assert get_see_alsos(xml, context) is None

    def test_only_invalid_ids_is_none(
        self, context: ParserContext, collector: ReferenceCollector
    ) -> None:
        xml = '<member><exception cref="!:Bad"/><exception>no cref</exception></member>'
        assert get_exceptions(xml, context) is None
        assert collector.references == []

    def test_malformed_is_none(self, context: ParserContext) -> None:
        assert get_exceptions('<member><exception cref="T:E">', context) is None
        assert get_sees("not xml at all", context) is None
        assert get_see_alsos(None, context) is None


class TestFailingReferenceSink:
    """A sink that raises must not stop extraction."""

    @staticmethod
    def _raise(reference: str) -> None:
        raise RuntimeError("sink failed")

    def test_sees_still_returned(self) -> None:
        context = ParserContext(reference_sink=self._raise)
        xml = '<member><see cref="T:A"/><see cref="T:B"/></member>'
        assert get_sees(xml, context) == [
            CrefInfo(type="A", description=None),
            CrefInfo(type="B", description=None),
        ]

    def test_summary_falls_back_to_unresolved(self) -> None:
        context = ParserContext(reference_sink=self._raise)
        xml = '<member><summary>a <see cref="T:A"/></summary></member>'
        assert get_summary(xml, context) == 'a <see cref="T:A"/>'

    def test_exceptions_with_nested_see(self) -> None:
        context = ParserContext(reference_sink=self._raise)
        xml = '<member><exception cref="T:E">When <see cref="T:X"/> fails</exception></member>'
        assert get_exceptions(xml, context) == [
            CrefInfo(type="E", description="When  fails")
        ]


class TestTrailingNewlineInCref:
    """An id ending in a newline is not a valid reference."""

    def test_see_with_trailing_newline_skipped(
        self, context: ParserContext, collector: ReferenceCollector
    ) -> None:
        xml = '<member><see cref="T:A&#10;"/><see cref="T:B"/></member>'
        assert get_sees(xml, context) == [CrefInfo(type="B", description=None)]
        assert collector.references == ["B"]
