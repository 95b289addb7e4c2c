"""Unit tests for output assembly and batch processing."""

import base64

import pytest
import pytest_check as check

from pdfparse.config import ParserConfig
from pdfparse.models import BatchItem, ParseOptions
from pdfparse.parsing import InvalidSource
from pdfparse.parsing.pdf_parser import PDFContent
from pdfparse.pipeline import assemble_output, parse_document, process_batch

NOT_A_PDF = base64.b64encode(b"not a pdf").decode()


@pytest.fixture
def content() -> PDFContent:
    """Return extraction output for a two-page document."""
    return PDFContent(
        text="page one\fpage two",
        pages=2,
        metadata={"title": "Doc"},
        version="1.7",
    )


class TestAssembleOutput:
    """Tests for output record assembly."""

    def test_default_shape(self, content: PDFContent) -> None:
        """Text, page count and statistics are added to the record."""
        output = assemble_output({"id": 1}, "page one\fpage two", content, ParseOptions())

        check.equal(output["id"], 1)
        check.equal(output["result"], "page one\fpage two")
        check.equal(output["numPages"], 2)
        check.is_not_in("pdfMetadata", output)
        check.equal(output["pdfStats"], {"textLength": 17, "wordCount": 4, "pageCount": 2})

    def test_split_by_pages(self, content: PDFContent) -> None:
        """Split output is a list of page texts."""
        options = ParseOptions(split_by_pages=True)
        output = assemble_output({}, "page one\f \fpage two", content, options)

        assert output["result"] == ["page one", "page two"]

    def test_metadata_replaces_page_count(self, content: PDFContent) -> None:
        """Requested metadata is added instead of the bare page count."""
        options = ParseOptions(include_metadata=True)
        output = assemble_output({}, "text", content, options)

        check.is_not_in("numPages", output)
        check.equal(
            output["pdfMetadata"],
            {"numPages": 2, "info": {"title": "Doc"}, "metadata": None, "version": "1.7"},
        )

    def test_metadata_includes_xmp_fields(self, content: PDFContent) -> None:
        """XMP metadata of the document is passed through under metadata."""
        xmp = {"dc_title": {"x-default": "Doc"}, "xmp_creator_tool": "Writer"}
        content = content.model_copy(update={"xmp_metadata": xmp})
        output = assemble_output({}, "text", content, ParseOptions(include_metadata=True))

        assert output["pdfMetadata"]["metadata"] == xmp

    def test_output_property(self, content: PDFContent) -> None:
        """The option's output key takes precedence over the default."""
        options = ParseOptions(output_property="text")
        output = assemble_output({}, "t", content, options, output_property="body")

        check.equal(output["text"], "t")
        check.is_not_in("body", output)
        check.is_not_in("result", output)

    def test_record_not_mutated(self, content: PDFContent) -> None:
        """The caller's record is copied, not modified."""
        record = {"id": 1}
        assemble_output(record, "text", content, ParseOptions())

        assert record == {"id": 1}


class TestParseDocument:
    """Tests for single-document parsing."""

    def test_formats_with_requested_mode(
        self, sample_pdf: bytes, parser_config: ParserConfig
    ) -> None:
        """Compact mode joins the document onto one line."""
        options = ParseOptions(text_formatting="compact")
        output = parse_document(sample_pdf, options, config=parser_config)

        check.is_not_in("\n", output["result"])
        check.is_not_in("\f", output["result"])
        check.is_in("Invoice Alpha", output["result"])
        check.equal(output["numPages"], 3)

    def test_split_pages_in_raw_mode(
        self, sample_pdf: bytes, parser_config: ParserConfig
    ) -> None:
        """Raw text keeps form feeds so it splits into pages."""
        options = ParseOptions(split_by_pages=True)
        output = parse_document(sample_pdf, options, config=parser_config)

        check.equal(len(output["result"]), 3)
        check.is_in("Second Page", output["result"][1])

    def test_config_supplies_defaults(
        self, sample_pdf: bytes, parser_config: ParserConfig
    ) -> None:
        """Configured output key and mode apply when options omit them."""
        config = parser_config.model_copy(
            update={"output_property": "content", "text_formatting": "compact"}
        )
        output = parse_document(sample_pdf, ParseOptions(), config=config)

        check.is_in("content", output)
        check.is_not_in("\n", output["content"])


class TestProcessBatch:
    """Tests for batch processing and failure policy."""

    @pytest.fixture
    def items(self, sample_pdf: bytes) -> list[BatchItem]:
        """Return a valid item followed by an invalid one."""
        return [
            BatchItem(record={"id": 1}, data=base64.b64encode(sample_pdf).decode()),
            BatchItem(record={"id": 2}, data=NOT_A_PDF),
        ]

    async def test_continue_on_fail_annotates_item(
        self, items: list[BatchItem], parser_config: ParserConfig
    ) -> None:
        """Failed items are forwarded with an error field."""
        results = await process_batch(items, continue_on_fail=True, config=parser_config)

        check.equal(len(results), 2)
        check.equal(results[0]["id"], 1)
        check.equal(results[0]["numPages"], 3)
        check.equal(results[1]["id"], 2)
        check.is_in("PDF header", results[1]["error"])
        check.is_not_in("result", results[1])

    async def test_abort_reports_item_index(
        self, items: list[BatchItem], parser_config: ParserConfig
    ) -> None:
        """Without continue-on-fail the first failure is raised with its index."""
        with pytest.raises(InvalidSource) as exc_info:
            await process_batch(items, continue_on_fail=False, config=parser_config)

        assert exc_info.value.item_index == 1

    async def test_policy_defaults_to_config(
        self, items: list[BatchItem], parser_config: ParserConfig
    ) -> None:
        """An unset policy falls back to the configured default."""
        config = parser_config.model_copy(update={"continue_on_fail": True})
        results = await process_batch(items, config=config)

        assert "error" in results[1]

    async def test_order_preserved(
        self, sample_pdf: bytes, parser_config: ParserConfig
    ) -> None:
        """Outputs follow input order."""
        encoded = base64.b64encode(sample_pdf).decode()
        items = [BatchItem(record={"id": i}, data=encoded) for i in range(3)]

        results = await process_batch(items, config=parser_config)

        assert [r["id"] for r in results] == [0, 1, 2]
