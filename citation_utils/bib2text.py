import re
import bibtexparser
from bibtexparser.bparser import BibTexParser
from bibtexparser.bibdatabase import BibDatabase
from bibtexparser.customization import convert_to_unicode

# 资料类型 -> BibTeX条目类型
ENTRY_TYPES = {
    'book': 'book',
    'journal': 'article',
    'article': 'article',
    'thesis': 'phdthesis',
    'conference-paper': 'inproceedings',
}

HONORIFICS = ('dr.', 'prof.', 'mr.', 'mrs.', 'ms.', 'engr.')

CITATION_STYLES = ('apa', 'mla', 'gb7714')


# 末尾的括号说明，如 "(MSc Thesis)"
QUALIFIER_PATTERN = re.compile(r'\s*\([^)]*\)\s*$')


def split_honorific(author):
    """拆出称谓，返回 (是否个人作者, 去掉称谓和括号说明后的姓名)

    带称谓、或带学位说明的多词姓名视为个人作者，否则按机构作者原样输出。
    """
    author = (author or '').strip()
    author, qualified = QUALIFIER_PATTERN.subn('', author)
    parts = author.split()
    if parts and parts[0].lower() in HONORIFICS:
        return True, ' '.join(parts[1:])
    return qualified > 0 and len(parts) > 1, author


def _citation_key(material, used_keys):
    personal, name = split_honorific(material.get('author'))
    surname = name.split()[-1] if personal and name else (name.split()[0] if name else 'anon')
    first_word = next((w for w in re.findall(r'[A-Za-z0-9]+', material.get('title', '')) if len(w) > 3), 'untitled')
    base = re.sub(r'[^a-z0-9]', '', f"{surname}{material.get('year', '')}{first_word}".lower()) or 'ref'
    key = base
    suffix = ord('a')
    while key in used_keys:
        key = f"{base}{chr(suffix)}"
        suffix += 1
    used_keys.add(key)
    return key


def material_to_entry(material, used_keys=None):
    """资料记录 -> bibtexparser条目(dict)"""
    used_keys = used_keys if used_keys is not None else set()
    personal, name = split_honorific(material.get('author'))
    entry = {
        'ENTRYTYPE': ENTRY_TYPES.get(material.get('type'), 'misc'),
        'ID': _citation_key(material, used_keys),
        # 机构作者用花括号包住，避免被拆成姓和名
        'author': name if personal else '{' + name + '}',
        'title': material.get('title', ''),
        'year': str(material.get('year', '')),
    }
    if material.get('keywords'):
        entry['keywords'] = ', '.join(material['keywords'])
    if material.get('description'):
        entry['abstract'] = material['description']
    if material.get('fileUrl'):
        entry['url'] = material['fileUrl']
    return entry


def materials_to_bibtex(materials):
    """将资料列表导出为BibTeX字符串"""
    used_keys = set()
    database = BibDatabase()
    database.entries = [material_to_entry(m, used_keys) for m in materials]
    return bibtexparser.dumps(database)


def format_author(authors, style):
    """根据引用格式要求格式化作者列表"""
    if not authors:
        return ""

    names = authors.replace('\n', ' ').split(' and ')

    formatted_names = []
    for name in names:
        name = name.strip()
        # 机构作者
        if name.startswith('{') and name.endswith('}'):
            formatted_names.append(name.strip('{}'))
            continue
        # "姓, 名"
        if ',' in name:
            parts = [p.strip() for p in name.split(',', 1)]
            surname, given_names = parts[0], parts[1]
        else:
            parts = name.split()
            if len(parts) < 2:
                formatted_names.append(name)
                continue
            surname, given_names = parts[-1], ' '.join(parts[:-1])

        if style == 'mla':
            formatted_names.append(f"{surname}, {given_names}")
        else:
            # APA和GB/T使用名缩写
            initials = '. '.join([n[0] for n in given_names.split() if n]) + '.'
            formatted_names.append(f"{surname}, {initials}")

    if style == 'gb7714':
        if len(formatted_names) > 3:
            return f"{', '.join(formatted_names[:3])}, 等"
        return ', '.join(formatted_names)

    if len(formatted_names) == 1:
        return formatted_names[0]

    if len(formatted_names) == 2:
        return f"{formatted_names[0]} and {formatted_names[1]}"

    return f"{', '.join(formatted_names[:-1])}, and {formatted_names[-1]}"


def format_title(title, style):
    """根据引用格式要求格式化标题"""
    title = title.strip('{}')
    if not title:
        return title

    if style == 'mla':
        # MLA格式标题：首字母大写（除冠词、介词等）
        words = title.split()
        capitalized = []
        for i, word in enumerate(words):
            if i == 0 or word.lower() not in ['a', 'an', 'the', 'and', 'but', 'or', 'for', 'nor', 'on', 'at', 'to',
                                              'by', 'in', 'of']:
                capitalized.append(word[0].upper() + word[1:])
            else:
                capitalized.append(word.lower())
        return ' '.join(capitalized)

    # APA和GB/T格式标题：仅首单词首字母大写
    return title[0].upper() + title[1:]


def format_reference(entry, style='apa'):
    """根据条目类型和引用格式生成格式化引用"""
    if style not in CITATION_STYLES:
        style = 'apa'
    entry_type = entry['ENTRYTYPE'].lower()
    author = format_author(entry.get('author', ''), style)
    year = entry.get('year') or 'n.d.'
    title = format_title(entry.get('title', ''), style)

    if style == 'apa':
        if entry_type == 'book':
            return f"{author} ({year}). {title}"
        if entry_type == 'phdthesis':
            return f"{author} ({year}). {title} [Doctoral dissertation]"
        if entry_type == 'inproceedings':
            return f"{author} ({year}). {title} [Conference paper]"
        return f"{author} ({year}). {title}"

    if style == 'mla':
        if entry_type == 'book':
            return f"{author}. {title}. {year}"
        if entry_type == 'phdthesis':
            return f"{author}. \"{title}.\" Dissertation, {year}"
        return f"{author}. \"{title}.\" {year}"

    # GB/T 7714
    type_marks = {'book': 'M', 'article': 'J', 'inproceedings': 'C', 'phdthesis': 'D'}
    # 缩写名末尾已有句点
    author = remove_trailing_punctuation(author)
    return f"{author}. {title}[{type_marks.get(entry_type, 'Z')}]. {year}"


def remove_trailing_punctuation(text):
    """去除字符串末尾的逗号、冒号和句号"""
    if not text or not isinstance(text, str):
        return text
    text = text.strip()
    while text and text[-1] in [',', ':', '.']:
        text = text[:-1].rstrip()
    return text


def _customize(record):
    """convert_to_unicode会去掉花括号，作者字段保留原样以区分机构作者"""
    author = record.get('author')
    record = convert_to_unicode(record)
    if author is not None:
        record['author'] = author
    return record


def bibtex_to_text(bibtex_str, style='apa'):
    """将BibTeX字符串转换为格式化文本，每条一行"""
    parser = BibTexParser()
    parser.customization = _customize  # 处理特殊字符
    bib_db = bibtexparser.loads(bibtex_str, parser=parser)

    output = []
    for entry in bib_db.entries:
        real_ref = remove_trailing_punctuation(format_reference(entry, style))
        output.append(real_ref + '.')

    return '\n'.join(output)


def materials_to_text(materials, style='apa'):
    """资料列表 -> 格式化引用文本"""
    if not materials:
        return ''
    return bibtex_to_text(materials_to_bibtex(materials), style)
