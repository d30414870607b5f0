import pytest

from citation_utils.bib2text import (
    format_author,
    format_title,
    materials_to_bibtex,
    materials_to_text,
    remove_trailing_punctuation,
    split_honorific,
)


@pytest.fixture
def book():
    return {
        'id': '1',
        'title': 'Data structures in practice',
        'author': 'Dr. Sarah Johnson',
        'type': 'book',
        'year': '2021',
    }


def test_split_honorific():
    assert split_honorific('Prof. Mary Adebayo') == (True, 'Mary Adebayo')
    assert split_honorific('University of Jos') == (False, 'University of Jos')
    assert split_honorific(None) == (False, '')


def test_materials_to_bibtex_uses_entry_types_and_unique_keys(book):
    thesis = dict(book, id='2', type='thesis')

    bibtex = materials_to_bibtex([book, thesis])

    assert '@book{johnson2021data,' in bibtex
    assert '@phdthesis{johnson2021dataa,' in bibtex


@pytest.mark.parametrize('style, expected', [
    ('apa', 'Johnson, S. (2021). Data structures in practice.'),
    ('mla', 'Johnson, Sarah. Data Structures in Practice. 2021.'),
    ('gb7714', 'Johnson, S. Data structures in practice[M]. 2021.'),
])
def test_materials_to_text_styles(book, style, expected):
    assert materials_to_text([book], style) == expected


def test_unknown_style_falls_back_to_apa(book):
    assert materials_to_text([book], 'chicago') == materials_to_text([book], 'apa')


def test_corporate_author_is_not_split():
    report = {
        'id': '9',
        'title': 'Annual research report',
        'author': 'University of Jos',
        'type': 'article',
        'year': '2022',
    }

    assert materials_to_text([report], 'apa') == 'University of Jos (2022). Annual research report.'


def test_materials_to_text_empty():
    assert materials_to_text([]) == ''


def test_format_author_lists():
    assert format_author('Ada Lovelace and Alan Turing', 'apa') == 'Lovelace, A. and Turing, A.'
    assert format_author('A One and B Two and C Three and D Four', 'gb7714') == 'One, A., Two, B., Three, C., 等'
    assert format_author('', 'mla') == ''


def test_format_title_and_punctuation():
    assert format_title('{the art of computing}', 'mla') == 'The Art of Computing'
    assert remove_trailing_punctuation('Title.,: ') == 'Title'


def test_degree_qualifier_marks_personal_author():
    """Test that thesis authors like 'Ibrahim Sani (MSc Thesis)' are formatted as people"""
    thesis = {
        'id': '35',
        'title': 'Impact of Climate Change on Agriculture in Northern Nigeria',
        'author': 'Ibrahim Sani (MSc Thesis)',
        'type': 'thesis',
        'year': '2024',
    }

    assert split_honorific(thesis['author']) == (True, 'Ibrahim Sani')
    text = materials_to_text([thesis], 'apa')
    assert text.startswith('Sani, I. (2024). Impact of Climate Change')
    assert '(MSc Thesis)' not in text
