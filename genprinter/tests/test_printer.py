"""Tests for the Printer content buffer and file serialization."""

from io import BytesIO
from unittest.mock import MagicMock

import pytest

from genprinter.config import PrinterConfig
from genprinter.exceptions import (
    ContractViolationError,
    OutputError,
    UnbalancedIndentError,
)
from genprinter.printer import Printer

HEADER = '// Code generated by genprinter DO NOT EDIT.\n\n'


class TestLines:
    """Test appending lines."""

    def test_has_content_initially_false(self):
        assert Printer('main').has_content() is False

    def test_has_content_after_line(self):
        p = Printer('main')
        p.line('')
        assert p.has_content() is True

    def test_line_adds_newline(self):
        p = Printer('main')
        p.line('var x = 1')
        assert p.content() == 'var x = 1\n'

    def test_line_formats_args(self):
        p = Printer('main')
        p.line('func %s(%s int) {', 'deriveEqual', 'x')
        assert p.content() == 'func deriveEqual(x int) {\n'

    def test_line_without_args_is_verbatim(self):
        """Test that percent signs and braces pass through without args."""
        p = Printer('main')
        p.line('fmt.Sprintf("%d%%", n) {}')
        assert p.content() == 'fmt.Sprintf("%d%%", n) {}\n'

    def test_blank_line(self):
        p = Printer('main')
        p.indent()
        p.blank()
        assert p.content() == '\n'
        assert p.has_content()

    def test_lines_keep_order(self):
        p = Printer('main')
        for i in range(3):
            p.line('// %d', i)
        assert p.content() == '// 0\n// 1\n// 2\n'


class TestIndentation:
    """Test indent tracking."""

    def test_indent_prefixes_lines(self):
        p = Printer('main')
        p.line('func f() {')
        p.indent()
        p.line('if x {')
        p.indent()
        p.line('return')
        p.dedent()
        p.line('}')
        p.dedent()
        p.line('}')
        assert p.content() == 'func f() {\n\tif x {\n\t\treturn\n\t}\n}\n'

    def test_depth(self):
        p = Printer('main')
        p.indent()
        p.indent()
        assert p.depth == 2
        p.dedent()
        assert p.depth == 1

    def test_dedent_at_zero_raises(self):
        p = Printer('main')
        with pytest.raises(UnbalancedIndentError, match='unindenting more than'):
            p.dedent()

    def test_dedent_after_balanced_block_raises(self):
        p = Printer('main')
        p.indent()
        p.dedent()
        with pytest.raises(ContractViolationError):
            p.dedent()
        assert p.depth == 0

    def test_indented_context_manager(self):
        p = Printer('main')
        p.line('{')
        with p.indented():
            p.line('x')
            with p.indented():
                p.line('y')
        p.line('}')
        assert p.content() == '{\n\tx\n\t\ty\n}\n'
        assert p.depth == 0

    def test_indented_restores_depth_on_error(self):
        p = Printer('main')
        with pytest.raises(KeyError):
            with p.indented():
                raise KeyError('boom')
        assert p.depth == 0

    def test_custom_indent_unit(self):
        p = Printer('main', PrinterConfig(indent='    '))
        with p.indented():
            p.line('x')
        assert p.content() == '    x\n'


class TestHeader:
    """Test the generated header block."""

    def test_header_without_imports(self):
        p = Printer('main')
        assert p.header() == HEADER + 'package main\n'

    def test_header_uses_generator_name(self):
        p = Printer('derived', PrinterConfig(generator='goderive'))
        assert p.header().startswith('// Code generated by goderive DO NOT EDIT.\n')

    def test_unresolved_imports_are_not_written(self):
        p = Printer('main')
        p.new_import('fmt', 'fmt')
        assert 'import' not in p.header()

    def test_import_block(self):
        p = Printer('main')
        p.new_import('fmt', 'fmt')()
        p.new_import('pkgerrors', 'github.com/pkg/errors')()
        p.new_import('strings', 'strings')()
        assert p.header() == (
            HEADER
            + 'package main\n'
            + '\n'
            + 'import (\n'
            + '\t"fmt"\n'
            + '\tpkgerrors "github.com/pkg/errors"\n'
            + '\t"strings"\n'
            + ')\n'
        )

    def test_import_block_sorted_by_path(self):
        """Test that the import order does not follow resolution order."""
        first = Printer('main')
        second = Printer('main')
        specs = [('strings', 'strings'), ('bytes', 'bytes'), ('fmt', 'fmt')]
        for name, path in specs:
            first.new_import(name, path)()
        for name, path in reversed(specs):
            second.new_import(name, path)()
        assert first.render() == second.render()
        assert first.header().index('"bytes"') < first.header().index('"fmt"')
        assert first.header().index('"fmt"') < first.header().index('"strings"')

    def test_fmt_collision_in_header(self):
        p = Printer('main')
        assert p.new_import('fmt', 'fmt')() == 'fmt'
        assert p.new_import('fmt', 'example.com/pkg/fmt')() == 'example_com_pkg_fmt'
        header = p.header()
        assert '\texample_com_pkg_fmt "example.com/pkg/fmt"\n' in header
        assert '\t"fmt"\n' in header
        assert header.index('example.com/pkg/fmt') < header.index('\t"fmt"')

    def test_vendored_import_written_unvendored(self):
        p = Printer('main')
        p.new_import('errors', 'github.com/me/app/vendor/github.com/pkg/errors')()
        assert '\terrors "github.com/pkg/errors"\n' in p.header()
        assert 'vendor' not in p.header()

    def test_vendor_marker_from_config(self):
        p = Printer('main', PrinterConfig(vendor_marker='/third_party/'))
        p.new_import('x', 'app/third_party/lib/x')()
        assert '\tx "lib/x"\n' in p.header()


class TestWriteTo:
    """Test serialization to a sink."""

    def _printer(self) -> Printer:
        p = Printer('main')
        fmt = p.new_import('fmt', 'fmt')
        p.line('func main() {')
        with p.indented():
            p.line('%s.Println("héllo")', fmt())
        p.line('}')
        return p

    def test_full_output(self):
        p = self._printer()
        sink = BytesIO()
        written = p.write_to(sink)
        expected = (
            HEADER
            + 'package main\n'
            + '\n'
            + 'import (\n'
            + '\t"fmt"\n'
            + ')\n'
            + 'func main() {\n'
            + '\tfmt.Println("héllo")\n'
            + '}\n'
        )
        assert sink.getvalue().decode('utf-8') == expected
        assert written == len(expected.encode('utf-8'))

    def test_render_matches_write_to(self):
        p = self._printer()
        sink = BytesIO()
        p.write_to(sink)
        assert p.render() == sink.getvalue().decode('utf-8')

    def test_empty_printer_writes_header(self):
        sink = BytesIO()
        written = Printer('empty').write_to(sink)
        assert sink.getvalue() == (HEADER + 'package empty\n').encode('utf-8')
        assert written == len(sink.getvalue())

    def test_counts_bytes_when_sink_returns_none(self):
        chunks = []
        sink = MagicMock()
        sink.write.side_effect = lambda data: chunks.append(data)
        written = self._printer().write_to(sink)
        assert written == sum(len(chunk) for chunk in chunks)
        assert sink.write.call_count == 2

    def test_error_on_first_write_stops(self):
        sink = MagicMock()
        sink.write.side_effect = OSError('disk full')
        with pytest.raises(OutputError) as exc_info:
            self._printer().write_to(sink)
        assert exc_info.value.bytes_written == 0
        assert isinstance(exc_info.value.cause, OSError)
        assert sink.write.call_count == 1

    def test_error_on_content_reports_partial_count(self):
        p = self._printer()
        header_size = len(p.header().encode('utf-8'))
        sink = MagicMock()
        sink.write.side_effect = [header_size, OSError('broken pipe')]
        with pytest.raises(OutputError) as exc_info:
            p.write_to(sink)
        assert exc_info.value.bytes_written == header_size
        assert 'broken pipe' in str(exc_info.value)

    def test_short_write_stops(self):
        """Test that a sink accepting half of a chunk ends the write."""
        p = self._printer()
        header = p.header().encode('utf-8')
        chunks = []

        def write_half(data):
            chunks.append(data[: len(data) // 2])
            return len(data) // 2

        sink = MagicMock()
        sink.write.side_effect = write_half
        with pytest.raises(OutputError, match='short write') as exc_info:
            p.write_to(sink)
        assert exc_info.value.bytes_written == len(header) // 2
        assert sink.write.call_count == 1
        assert chunks == [header[: len(header) // 2]]

    def test_closed_sink(self):
        sink = BytesIO()
        sink.close()
        with pytest.raises(OutputError):
            self._printer().write_to(sink)
