import pytest

from aaccore.hufftab import SCALE_FACTOR_BOOK, Codeword, codebook, codeword

ALL_BOOKS = range(1, 13)


def _bits(word):
    return format(word.code, f"0{word.length}b")


@pytest.mark.parametrize(
    "book, size",
    [(1, 81), (2, 81), (3, 81), (4, 81), (5, 81), (6, 81),
     (7, 64), (8, 64), (9, 169), (10, 169), (11, 289), (12, 121)],
)
def test_codebook_sizes(book, size):
    assert len(codebook(book)) == size


@pytest.mark.parametrize("book", ALL_BOOKS)
def test_codes_fit_their_length(book):
    for word in codebook(book):
        assert 1 <= word.length <= 19
        assert 0 <= word.code < (1 << word.length)


@pytest.mark.parametrize("book", ALL_BOOKS)
def test_codebooks_are_prefix_free(book):
    codes = sorted(_bits(word) for word in codebook(book))
    assert len(set(codes)) == len(codes)
    for shorter, longer in zip(codes, codes[1:]):
        assert not longer.startswith(shorter)


def test_pinned_values_from_tables():
    assert codeword(1, 0) == Codeword(11, 2040)
    assert codeword(1, 40) == Codeword(1, 0)
    assert codeword(11, 288) == Codeword(5, 4)
    assert codeword(SCALE_FACTOR_BOOK, 60) == Codeword(1, 0)
    assert codeword(12, 0) == (18, 262120)


@pytest.mark.parametrize("book", ALL_BOOKS)
def test_codeword_matches_codebook(book):
    table = codebook(book)
    assert codeword(book, len(table) - 1) == table[-1]
    assert codeword(book, 0) == table[0]


@pytest.mark.parametrize("book", [0, 13, -1, "1"])
def test_unknown_book_rejected(book):
    with pytest.raises(ValueError):
        codebook(book)


@pytest.mark.parametrize("index", [-1, 81])
def test_index_out_of_range(index):
    with pytest.raises(IndexError):
        codeword(1, index)