import pytest

from docextract.core.exceptions import EncodingUndeterminedError
from docextract.services.extraction.base import ExtractionOptions
from docextract.services.extraction.txt_extractor import TextDecoderStrategy

OPTIONS = ExtractionOptions(timeout=None)


class TestTextDecoderStrategy:
    def test_extract_utf8_text(self):
        data = "Unicode text: café, naïve, résumé. Ready for review.".encode("utf-8")
        result = TextDecoderStrategy().attempt(data, OPTIONS)

        assert "résumé" in result.text
        assert result.method == "text-decoder"
        assert result.metadata.encoding == "utf-8"
        assert result.warnings == []

    def test_iso_8859_1_detected(self):
        text = "Résumé of José Garcia, former café owner and naïve optimist."
        result = TextDecoderStrategy().attempt(text.encode("iso-8859-1"), OPTIONS)

        assert result.text == text
        assert result.metadata.encoding == "iso-8859-1"
        assert result.warnings == ["Detected encoding: iso-8859-1"]
        assert result.confidence > 0.7

    @pytest.mark.parametrize("text", ["data à engineer senior", "Müller über vu hôtel"])
    def test_even_length_latin1_not_read_as_utf16(self, text):
        # Even byte counts also decode strictly as utf-16, into CJK code points
        data = text.encode("iso-8859-1")
        assert len(data) % 2 == 0

        result = TextDecoderStrategy().attempt(data, OPTIONS)

        assert result.text == text
        assert result.metadata.encoding == "iso-8859-1"

    def test_utf16_with_bom(self):
        data = "Experienced project manager. Delivered on time.".encode("utf-16")
        result = TextDecoderStrategy().attempt(data, OPTIONS)

        assert result.text == "Experienced project manager. Delivered on time."
        assert result.metadata.encoding == "utf-16"

    def test_windows_1252_only_bytes(self):
        # 0x80 is the euro sign in windows-1252, a C1 control in iso-8859-1
        data = b"Salary expectation: \x80 50,000 per year. Negotiable."
        result = TextDecoderStrategy().attempt(data, OPTIONS)
        assert result.metadata.encoding in ("iso-8859-1", "windows-1252")

    def test_empty_buffer_raises(self):
        with pytest.raises(EncodingUndeterminedError):
            TextDecoderStrategy().attempt(b"", OPTIONS)

    def test_too_short_raises(self):
        with pytest.raises(EncodingUndeterminedError):
            TextDecoderStrategy().attempt(b"hi", OPTIONS)

    def test_language_skipped_without_metadata(self):
        options = ExtractionOptions(timeout=None, extract_metadata=False)
        result = TextDecoderStrategy().attempt(b"A plain sentence for the reader.", options)
        assert result.metadata.language is None
