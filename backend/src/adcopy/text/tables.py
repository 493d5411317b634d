"""Static language lookup tables, built once at import and never mutated.

LANGUAGE_NAMES maps BCP 47-ish codes (primary subtag or language-region) to the
display name used in the copy prompt. TLD_LANGUAGES maps country-code TLDs to
the dominant language code. ISO3_TO_ISO2 maps ISO 639-2 codes seen in URL
paths (``/deu/``, ``/svk_``) to their 2-letter form.
"""

from types import MappingProxyType

LANGUAGE_NAMES = MappingProxyType({
    "de": "German", "de-de": "German", "de-at": "German", "de-ch": "German",
    "fr": "French", "fr-fr": "French", "fr-ch": "French", "fr-be": "French",
    "it": "Italian", "it-it": "Italian", "it-ch": "Italian",
    "es": "Spanish", "es-es": "Spanish", "es-mx": "Spanish", "es-ar": "Spanish",
    "pt": "Portuguese", "pt-br": "Portuguese", "pt-pt": "Portuguese",
    "ro": "Romanian", "ro-ro": "Romanian",
    "nl": "Dutch", "nl-nl": "Dutch", "nl-be": "Dutch",
    "sv": "Swedish", "sv-se": "Swedish",
    "da": "Danish", "da-dk": "Danish",
    "nb": "Norwegian", "no": "Norwegian", "nn": "Norwegian",
    "fi": "Finnish", "fi-fi": "Finnish",
    "is": "Icelandic", "is-is": "Icelandic",
    "pl": "Polish", "pl-pl": "Polish",
    "cs": "Czech", "cs-cz": "Czech",
    "sk": "Slovak", "sk-sk": "Slovak",
    "hr": "Croatian", "hr-hr": "Croatian",
    "sr": "Serbian", "sr-rs": "Serbian",
    "bg": "Bulgarian", "bg-bg": "Bulgarian",
    "uk": "Ukrainian", "uk-ua": "Ukrainian",
    "ru": "Russian", "ru-ru": "Russian",
    "sl": "Slovenian", "sl-si": "Slovenian",
    "hu": "Hungarian", "hu-hu": "Hungarian",
    "el": "Greek", "el-gr": "Greek",
    "tr": "Turkish", "tr-tr": "Turkish",
    "lt": "Lithuanian", "lt-lt": "Lithuanian",
    "lv": "Latvian", "lv-lv": "Latvian",
    "et": "Estonian", "et-ee": "Estonian",
    "zh": "Chinese", "zh-cn": "Chinese", "zh-tw": "Chinese", "zh-hk": "Chinese",
    "ja": "Japanese", "ja-jp": "Japanese",
    "ko": "Korean", "ko-kr": "Korean",
    "ar": "Arabic", "ar-sa": "Arabic", "ar-ae": "Arabic",
    "en": "English", "en-us": "English", "en-gb": "English", "en-au": "English",
})

TLD_LANGUAGES = MappingProxyType({
    "dk": "da", "se": "sv", "no": "nb", "fi": "fi", "is": "is",
    "de": "de", "at": "de", "ch": "de",
    "fr": "fr", "be": "fr", "it": "it", "es": "es",
    "pt": "pt", "mx": "es", "ar": "es", "co": "es",
    "nl": "nl", "pl": "pl", "cz": "cs", "sk": "sk",
    "hu": "hu", "ro": "ro", "hr": "hr", "bg": "bg",
    "gr": "el", "rs": "sr", "ua": "uk", "lt": "lt",
    "lv": "lv", "ee": "et", "si": "sl",
    "cn": "zh", "tw": "zh", "hk": "zh", "jp": "ja", "kr": "ko",
    "sa": "ar", "ae": "ar", "eg": "ar",
    "br": "pt", "ru": "ru", "tr": "tr",
})

ISO3_TO_ISO2 = MappingProxyType({
    "svk": "sk", "cze": "cs", "pol": "pl", "deu": "de", "fra": "fr",
    "ita": "it", "esp": "es", "nld": "nl", "por": "pt", "swe": "sv",
    "dan": "da", "nor": "nb", "fin": "fi", "hun": "hu", "ron": "ro",
    "hrv": "hr", "srp": "sr", "bul": "bg", "ell": "el", "ukr": "uk",
    "rus": "ru", "tur": "tr", "zho": "zh", "jpn": "ja", "kor": "ko",
    "ara": "ar", "isl": "is", "lit": "lt", "lav": "lv", "est": "et",
    "slk": "sk", "slv": "sl",
})

# Codes recognised as a locale subdomain (de.example.com). English is not a
# signal here: en.example.com is usually just the default site.
SUBDOMAIN_CODES = frozenset({
    "de", "fr", "it", "es", "nl", "pt", "pl", "sv", "da", "fi", "no", "nb",
    "cs", "sk", "hu", "ro", "hr", "bg", "el", "sr", "uk", "ru", "tr", "zh",
    "ja", "ko", "ar", "is", "lt", "lv", "et", "sl",
})

# Codes recognised as a locale path segment (/de/, /de-at/, /en_gb).
PATH_CODES = SUBDOMAIN_CODES | {"en"}
