from insightgraph.utils.text_processing import (
    count_words, filter_terms, normalise, split_sentences, strip_html, tokenize,
)


def test_tokenize_lowercases_and_strips_punctuation():
    txt = "Hello, World! It's a well-known fact_here."
    assert tokenize(txt) == ["hello", "world", "it's", "a", "well-known", "fact", "here"]


def test_tokenize_only_word_characters():
    txt = "Straße #tag naïve ÆON 3.14 x_y «quoted» — dash\r\nnew"
    for t in tokenize(txt):
        assert t == t.lower()
        assert all(ch.isalnum() or ch in "'-" for ch in t), t


def test_tokenize_unicode_letters():
    assert tokenize("Çünkü güzel şehir") == ["çünkü", "güzel", "şehir"]
    assert tokenize("你好。世界！") == ["你好", "世界"]


def test_tokenize_empty():
    assert tokenize("") == []
    assert tokenize("  ...!!  ") == []


def test_split_sentences_collapses_delimiters():
    assert split_sentences("First one... Second?! third") == ["First one", "Second", "third"]


def test_split_sentences_full_width():
    assert split_sentences("你好。世界！") == ["你好", "世界"]


def test_split_sentences_empty():
    assert split_sentences("") == []
    assert split_sentences("   ") == []
    assert split_sentences("?!.") == []


def test_filter_terms():
    stop = frozenset({"the"})
    assert filter_terms(["the", "an", "cat", "dog"], stop) == ["cat", "dog"]


def test_strip_html_and_normalise():
    assert "<p>" not in strip_html("<p>One</p><p>Two &amp; three</p>")
    assert "Two & three" in strip_html("<p>One</p><p>Two &amp; three</p>")
    assert normalise("a\r\nb c") == "a\nb c"


def test_count_words():
    assert count_words("one  two\nthree") == 3
