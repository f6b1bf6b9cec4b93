from docextract.services.extraction.confidence import (
    calculate_pdf_confidence,
    calculate_text_confidence,
    calculate_word_confidence,
    count_words,
    garbled_ratio,
)


class TestTextConfidence:
    def test_short_text_is_minimum(self):
        assert calculate_text_confidence("too short") == 0.1
        assert calculate_text_confidence("") == 0.1

    def test_clean_prose_scores_high(self):
        text = "Built data pipelines for the analytics team. Reduced costs by a third."
        assert calculate_text_confidence(text) == 0.9

    def test_sentence_bonus_needs_fragments_over_five_chars(self):
        # One 11-character word with no punctuation still counts as a fragment
        assert calculate_text_confidence("abcdefghijk") == 0.9
        # Fragments of at most 5 characters never count as sentences
        assert calculate_text_confidence("abc. def. ghi. jkl.") == 0.8

    def test_long_unbroken_token_loses_word_length_bonus(self):
        assert calculate_text_confidence("x" * 40 + ".") == 0.8

    def test_garbled_text_penalized(self):
        text = "¤¤¤ ©©© ®®® ¶¶¶ ¤¤¤. Some words"
        assert garbled_ratio(text) > 0.2
        assert calculate_text_confidence(text) == 0.6

    def test_accented_text_below_garbled_threshold(self):
        assert calculate_text_confidence("café résumé") == 0.9

    def test_cjk_counts_as_garbled(self):
        assert garbled_ratio("慤慴攠杮湩敥") == 1.0
        assert garbled_ratio("Müller Ωmega") == 1 / 12

    def test_bounds(self):
        for text in ["", "a" * 500, "€" * 500, "Hello there. " * 50]:
            value = calculate_text_confidence(text)
            assert 0.1 <= value <= 1.0


class TestPdfConfidence:
    def test_rich_pages(self):
        text = "word " * 1500
        assert calculate_pdf_confidence(text, 3) == 0.9

    def test_normal_pages(self):
        assert calculate_pdf_confidence("word " * 100, 1) == 0.8

    def test_sparse_pages(self):
        assert calculate_pdf_confidence("a few words", 2) == 0.5

    def test_garbled_sparse_pages_clamped(self):
        assert calculate_pdf_confidence("§§§§ ¶¶¶¶", 1) == 0.3

    def test_zero_pages_does_not_divide_by_zero(self):
        assert calculate_pdf_confidence("", 0) == 0.5


class TestWordConfidence:
    def test_clean_document(self):
        assert calculate_word_confidence("x" * 150, []) == 0.9

    def test_parser_warnings(self):
        assert calculate_word_confidence("x" * 150, ["Skipped 1 embedded image(s)"]) == 0.8

    def test_short_document(self):
        assert calculate_word_confidence("short", []) == 0.6

    def test_empty_document(self):
        assert calculate_word_confidence("", ["Document body contains no text paragraphs"]) == 0.5


class TestCountWords:
    def test_counts_whitespace_separated(self):
        assert count_words("  one two\nthree\tfour ") == 4

    def test_empty(self):
        assert count_words("") == 0
