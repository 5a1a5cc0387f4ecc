"""
Tests for keyword extraction.
"""

from jobmatch.keywords import STOP_WORDS, MAX_KEYWORDS, extract_keywords, tokenize


class TestTokenize:
    """Test token cleanup."""

    def test_punctuation_becomes_separator(self):
        """Non-alphanumeric characters split words."""
        assert tokenize("node.js/react-native") == ["node", "react", "native"]

    def test_short_tokens_dropped(self):
        """Tokens of two characters or fewer are dropped."""
        assert tokenize("go to ui api") == ["api"]

    def test_stop_words_dropped(self):
        """Stop words never survive tokenization."""
        assert tokenize("the team and their work") == ["team", "work"]


class TestExtractKeywords:
    """Test keyword selection."""

    def test_backend_engineer_example(self):
        """Repeated words are kept, most frequent first, ties in first-seen order."""
        description = "We need a senior senior backend engineer with strong backend skills"
        keywords = extract_keywords(description + " " + "Backend Engineer")
        assert keywords == ["backend", "senior", "engineer"]

    def test_single_occurrence_never_selected(self):
        """A word seen once is not a keyword, however salient."""
        keywords = extract_keywords("kubernetes terraform terraform")
        assert "kubernetes" not in keywords
        assert keywords == ["terraform"]

    def test_stop_words_excluded_regardless_of_frequency(self):
        """Stop words are filtered even when repeated."""
        text = "about about about which which there there python python"
        keywords = extract_keywords(text)
        assert keywords == ["python"]
        assert not set(keywords) & STOP_WORDS

    def test_case_insensitive_counting(self):
        """Mixed case occurrences count as the same word."""
        assert extract_keywords("Python PYTHON python") == ["python"]

    def test_limit(self):
        """At most MAX_KEYWORDS keywords are returned."""
        words = [f"word{i}" for i in range(30)]
        text = " ".join(words + words)
        keywords = extract_keywords(text)
        assert len(keywords) == MAX_KEYWORDS
        assert keywords == words[:MAX_KEYWORDS]

    def test_custom_limit(self):
        """Callers can request fewer keywords."""
        assert extract_keywords("alpha alpha beta beta gamma gamma", limit=2) == ["alpha", "beta"]

    def test_empty_text(self):
        """Empty input yields no keywords."""
        assert extract_keywords("") == []
