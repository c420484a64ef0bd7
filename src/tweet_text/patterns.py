"""Regular expressions for finding entities in tweet text.

Patterns are composed from smaller pattern strings and compiled once at import
time.  They are read-only afterwards.
"""

import re


def _char_range(start: int, end: int | None = None) -> str:
    if end is None:
        return re.escape(chr(start))
    return f"{re.escape(chr(start))}-{re.escape(chr(end))}"


UNICODE_SPACES = "".join(
    chr(cp) for cp in [
        *range(0x0009, 0x000E),  # <control-0009>..<control-000D>
        0x0020,                  # SPACE
        0x0085,                  # <control-0085>
        0x00A0,                  # NO-BREAK SPACE
        0x1680,                  # OGHAM SPACE MARK
        0x180E,                  # MONGOLIAN VOWEL SEPARATOR
        *range(0x2000, 0x200B),  # EN QUAD..HAIR SPACE
        0x2028,                  # LINE SEPARATOR
        0x2029,                  # PARAGRAPH SEPARATOR
        0x202F,                  # NARROW NO-BREAK SPACE
        0x205F,                  # MEDIUM MATHEMATICAL SPACE
        0x3000,                  # IDEOGRAPHIC SPACE
    ]
)

# Byte order marks, noncharacter U+FFFF and directional overrides.
INVALID_CHARACTERS = "\uFFFE\uFEFF\uFFFF\u202A\u202B\u202C\u202D\u202E"

# Excludes U+00D7 (multiplication sign) and U+00F7 (division sign).
LATIN_ACCENTS = "".join([
    _char_range(0x00C0, 0x00D6),
    _char_range(0x00D8, 0x00F6),
    _char_range(0x00F8, 0x00FF),
    _char_range(0x0100, 0x024F),
    _char_range(0x0253, 0x0254),
    _char_range(0x0256, 0x0257),
    _char_range(0x0259),
    _char_range(0x025B),
    _char_range(0x0263),
    _char_range(0x0268),
    _char_range(0x026F),
    _char_range(0x0272),
    _char_range(0x0289),
    _char_range(0x028B),
    _char_range(0x02BB),
    _char_range(0x0300, 0x036F),
    _char_range(0x1E00, 0x1EFF),
])

NON_LATIN_HASHTAG_CHARS = "".join([
    _char_range(0x0400, 0x04FF),  # Cyrillic
    _char_range(0x0500, 0x0527),
    _char_range(0x2DE0, 0x2DFF),
    _char_range(0xA640, 0xA69F),
    _char_range(0x0591, 0x05BF),  # Hebrew
    _char_range(0x05C1, 0x05C2),
    _char_range(0x05C4, 0x05C5),
    _char_range(0x05C7),
    _char_range(0x05D0, 0x05EA),
    _char_range(0x05F0, 0x05F4),
    _char_range(0xFB12, 0xFB28),
    _char_range(0xFB2A, 0xFB36),
    _char_range(0xFB38, 0xFB3C),
    _char_range(0xFB3E),
    _char_range(0xFB40, 0xFB41),
    _char_range(0xFB43, 0xFB44),
    _char_range(0xFB46, 0xFB4F),
    _char_range(0x0610, 0x061A),  # Arabic
    _char_range(0x0620, 0x065F),
    _char_range(0x066E, 0x06D3),
    _char_range(0x06D5, 0x06DC),
    _char_range(0x06DE, 0x06E8),
    _char_range(0x06EA, 0x06EF),
    _char_range(0x06FA, 0x06FC),
    _char_range(0x06FF),
    _char_range(0x0750, 0x077F),
    _char_range(0x08A0),
    _char_range(0x08A2, 0x08AC),
    _char_range(0x08E4, 0x08FE),
    _char_range(0xFB50, 0xFBB1),
    _char_range(0xFBD3, 0xFD3D),
    _char_range(0xFD50, 0xFD8F),
    _char_range(0xFD92, 0xFDC7),
    _char_range(0xFDF0, 0xFDFB),
    _char_range(0xFE70, 0xFE74),
    _char_range(0xFE76, 0xFEFC),
    _char_range(0x200C),          # zero-width non-joiner
    _char_range(0x0E01, 0x0E3A),  # Thai
    _char_range(0x0E40, 0x0E4E),
    _char_range(0x1100, 0x11FF),  # Hangul
    _char_range(0x3130, 0x3185),
    _char_range(0xA960, 0xA97F),
    _char_range(0xAC00, 0xD7AF),
    _char_range(0xD7B0, 0xD7FF),
    _char_range(0xFFA1, 0xFFDC),
])

CJ_HASHTAG_CHARS = "".join([
    _char_range(0x30A1, 0x30FA),  # Katakana
    _char_range(0x30FC, 0x30FE),
    _char_range(0xFF66, 0xFF9F),
    _char_range(0xFF10, 0xFF19),  # full-width Latin
    _char_range(0xFF21, 0xFF3A),
    _char_range(0xFF41, 0xFF5A),
    _char_range(0x3041, 0x3096),  # Hiragana
    _char_range(0x3099, 0x309E),
    _char_range(0x3400, 0x4DBF),  # Kanji
    _char_range(0x4E00, 0x9FFF),
    _char_range(0x20000, 0x2A6DF),
    _char_range(0x2A700, 0x2B73F),
    _char_range(0x2B740, 0x2B81F),
    _char_range(0x2F800, 0x2FA1F),
    _char_range(0x3003),
    _char_range(0x3005),
    _char_range(0x303B),
])

_PUNCTUATION = re.escape("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")
_SPACE = re.escape(" \t\n\x0b\f\r")
_CTRL = r"\x00-\x1f\x7f"

# --- hashtags ---

_HASHTAG_LETTERS = LATIN_ACCENTS + NON_LATIN_HASHTAG_CHARS + CJ_HASHTAG_CHARS
_HASHTAG_ALPHA = f"[a-z_{_HASHTAG_LETTERS}]"
_HASHTAG_ALPHANUMERIC = f"[a-z0-9_{_HASHTAG_LETTERS}]"
_HASHTAG_BOUNDARY = f"^|\\[|[^&a-z0-9_{_HASHTAG_LETTERS}]"

VALID_HASHTAG = re.compile(
    f"(?P<before>{_HASHTAG_BOUNDARY})"
    f"(?P<hash>[#\uFF03])"
    f"(?P<tag>{_HASHTAG_ALPHANUMERIC}*{_HASHTAG_ALPHA}{_HASHTAG_ALPHANUMERIC}*)",
    re.IGNORECASE,
)
END_HASHTAG_MATCH = re.compile(r"\A(?:[#\uFF03]|://)")

# --- mentions and lists ---

AT_SIGNS = re.compile("[@\uFF20]")
VALID_MENTION_OR_LIST = re.compile(
    "(?P<before>[^a-zA-Z0-9_!#$%&*@\uFF20]|^|RT:?)"
    "(?P<at>[@\uFF20])"
    "(?P<screen_name>[a-zA-Z0-9_]{1,20})"
    r"(?:/(?P<list_slug>[a-zA-Z][a-zA-Z0-9_\-]{0,24}))?",
)
END_MENTION_MATCH = re.compile(f"\\A(?:[@\uFF20]|[{LATIN_ACCENTS}]|://)", re.IGNORECASE)

# --- cashtags ---

VALID_CASHTAG = re.compile(
    f"(?P<before>^|[{UNICODE_SPACES}])"
    "(?P<dollar>[$\uFF04\uFE69])"
    r"(?P<symbol>[a-z]{1,6}(?:[._][a-z]{1,2})?)"
    f"(?=$|\\s|[{_PUNCTUATION}])",
    re.IGNORECASE,
)

# --- URLs ---

_DOMAIN_VALID_CHARS = (
    f"[^{_PUNCTUATION}{_SPACE}{_CTRL}{INVALID_CHARACTERS}{UNICODE_SPACES}]"
)
_VALID_SUBDOMAIN = (
    f"(?:(?:{_DOMAIN_VALID_CHARS}(?:[_-]|{_DOMAIN_VALID_CHARS})*)?{_DOMAIN_VALID_CHARS}\\.)"
)
_VALID_DOMAIN_NAME = (
    f"(?:(?:{_DOMAIN_VALID_CHARS}(?:[-]|{_DOMAIN_VALID_CHARS})*)?{_DOMAIN_VALID_CHARS}\\.)"
)
_GENERIC_TLDS = (
    "academy|aero|agency|app|arpa|asia|bar|best|bid|bike|biz|blog|blue|build|buzz|"
    "cab|camera|camp|cards|careers|cat|center|ceo|club|codes|coffee|com|community|"
    "company|computer|cool|coop|dance|dating|design|dev|directory|domains|edu|"
    "education|email|events|expert|farm|fish|foundation|gallery|gift|glass|gov|"
    "graphics|guru|holdings|house|info|institute|int|international|jobs|kim|"
    "kitchen|land|link|live|luxury|management|marketing|menu|mil|mobi|museum|"
    "name|net|news|ninja|online|org|partners|photo|photography|photos|pics|pink|"
    "post|pro|productions|properties|pub|red|repair|report|rich|shoes|shop|site|"
    "social|solutions|store|supply|support|systems|tech|technology|tel|tips|today|"
    "tokyo|tools|training|travel|vision|vote|voyage|watch|website|wiki|works|"
    "xxx|xyz|zone"
)
_COUNTRY_TLDS = (
    "ac|ad|ae|af|ag|ai|al|am|an|ao|aq|ar|as|at|au|aw|ax|az|ba|bb|bd|be|bf|bg|bh|bi|"
    "bj|bl|bm|bn|bo|bq|br|bs|bt|bv|bw|by|bz|ca|cc|cd|cf|cg|ch|ci|ck|cl|cm|cn|co|cr|"
    "cu|cv|cw|cx|cy|cz|de|dj|dk|dm|do|dz|ec|ee|eg|eh|er|es|et|eu|fi|fj|fk|fm|fo|fr|"
    "ga|gb|gd|ge|gf|gg|gh|gi|gl|gm|gn|gp|gq|gr|gs|gt|gu|gw|gy|hk|hm|hn|hr|ht|hu|id|"
    "ie|il|im|in|io|iq|ir|is|it|je|jm|jo|jp|ke|kg|kh|ki|km|kn|kp|kr|kw|ky|kz|la|lb|"
    "lc|li|lk|lr|ls|lt|lu|lv|ly|ma|mc|md|me|mf|mg|mh|mk|ml|mm|mn|mo|mp|mq|mr|ms|mt|"
    "mu|mv|mw|mx|my|mz|na|nc|ne|nf|ng|ni|nl|no|np|nr|nu|nz|om|pa|pe|pf|pg|ph|pk|pl|"
    "pm|pn|pr|ps|pt|pw|py|qa|re|ro|rs|ru|rw|sa|sb|sc|sd|se|sg|sh|si|sj|sk|sl|sm|sn|"
    "so|sr|ss|st|su|sv|sx|sy|sz|tc|td|tf|tg|th|tj|tk|tl|tm|tn|to|tp|tr|tt|tv|tw|tz|"
    "ua|ug|uk|um|us|uy|uz|va|vc|ve|vg|vi|vn|vu|wf|ws|ye|yt|za|zm|zw|"
    "рф|срб|укр|中国|台灣|한국"
)
_VALID_GTLD = f"(?:(?:{_GENERIC_TLDS})(?=[^0-9a-z@]|$))"
_VALID_CCTLD = f"(?:(?:{_COUNTRY_TLDS})(?=[^0-9a-z@]|$))"
_VALID_PUNYCODE = r"(?:xn--[0-9a-z]+)"

_VALID_DOMAIN = (
    f"(?:{_VALID_SUBDOMAIN}*{_VALID_DOMAIN_NAME}"
    f"(?:{_VALID_GTLD}|{_VALID_CCTLD}|{_VALID_PUNYCODE}))"
)

# Used to pull ASCII-only domains out of protocol-less candidates.  A match
# only starts where a label run starts; a later start inside the same run can
# never match where the run start failed.
_ASCII_LABEL_CHARS = f"[a-z0-9\\-_{LATIN_ACCENTS}]"
VALID_ASCII_DOMAIN = re.compile(
    f"(?<!{_ASCII_LABEL_CHARS})(?<!{_ASCII_LABEL_CHARS}\\.)"
    f"(?:{_ASCII_LABEL_CHARS}+\\.)+"
    f"(?:{_VALID_GTLD}|{_VALID_CCTLD}|{_VALID_PUNYCODE})",
    re.IGNORECASE,
)
# Bare "name.cc" domains are only linked when followed by a path.
INVALID_SHORT_DOMAIN = re.compile(f"\\A{_VALID_DOMAIN_NAME}{_VALID_CCTLD}\\Z", re.IGNORECASE)
VALID_TCO_URL = re.compile(r"^https?://t\.co/[a-z0-9]+", re.IGNORECASE)

_GENERAL_PATH_CHARS = f"[a-z0-9!*';:=+,.$/%#\\[\\]\\-_~&|@{LATIN_ACCENTS}]"
# Balanced parens, as in /Primer_(film) or IIS session ids /S(dfd346)/
_BALANCED_PARENS = f"\\({_GENERAL_PATH_CHARS}+\\)"
# Keeps a trailing period or comma out of the URL.
_PATH_ENDING_CHARS = f"[a-z0-9=_#/+\\-{LATIN_ACCENTS}]|(?:{_BALANCED_PARENS})"
_VALID_URL_PATH = (
    f"(?:(?:{_GENERAL_PATH_CHARS}*(?:{_BALANCED_PARENS}{_GENERAL_PATH_CHARS}*)*{_PATH_ENDING_CHARS})"
    f"|(?:{_GENERAL_PATH_CHARS}+/))"
)
_QUERY_CHARS = r"[a-z0-9!?*'();:&=+$/%#\[\]\-_.,~|@]"
_QUERY_ENDING_CHARS = r"[a-z0-9_&=#/]"

VALID_URL = re.compile(
    f"(?P<before>[^a-z0-9@\uFF20$#\uFF03{INVALID_CHARACTERS}]|^)"
    "(?P<url>"
    # Protocol-less domains never follow [-_./] or another domain character,
    # which also keeps the scan from restarting inside a run of labels.
    f"(?:(?P<protocol>https?://)|(?<![-_./])(?<!{_DOMAIN_VALID_CHARS}))"
    f"(?P<domain>{_VALID_DOMAIN})"
    r"(?::(?P<port>[0-9]+))?"
    f"(?P<path>/{_VALID_URL_PATH}*)?"
    f"(?P<query>\\?{_QUERY_CHARS}*{_QUERY_ENDING_CHARS})?"
    ")",
    re.IGNORECASE,
)
