from adcopy.models import LanguageSignals
from adcopy.text.language import LanguageResolver, to_language_name

resolver = LanguageResolver()


def resolve(**signals):
    return resolver.resolve(LanguageSignals(**signals))


def test_non_english_html_lang_wins_outright():
    result = resolve(html_lang="de", url_path_code="fr")
    assert result.language == "German"
    assert result.detected_code == "de"


def test_url_code_overrides_english_html_lang():
    result = resolve(html_lang="en", url_path_code="fr")
    assert result.language == "French"
    assert result.detected_code == "fr"


def test_english_region_variant_is_still_distrusted():
    assert resolve(html_lang="EN-us", og_locale="nl_NL").language == "Dutch"


def test_no_signals_defaults_to_english():
    result = resolve()
    assert result.language == "English"
    assert result.detected_code == "en"


def test_tld_alone():
    result = resolve(tld="dk", tld_lang="da")
    assert result.language == "Danish"
    assert result.detected_code == "da"


def test_fallback_precedence_order():
    full = dict(
        url_path_code="fr",
        subdomain_lang="it",
        og_locale="es_ES",
        header_lang="nl",
        hreflang="pl-PL",
        tld_lang="sv",
        html_lang="en",
    )
    expected = ["French", "Italian", "Spanish", "Dutch", "Polish", "Swedish", "English"]
    for key, language in zip(list(full), expected):
        assert resolve(**full).language == language
        del full[key]
    assert resolve(**full).detected_code == "en"


def test_english_html_lang_used_when_nothing_else():
    result = resolve(html_lang="en-GB")
    assert result.language == "English"
    assert result.detected_code == "en-GB"


def test_unknown_code_falls_back_to_english_but_keeps_code():
    result = resolve(html_lang="vi")
    assert result.language == "English"
    assert result.detected_code == "vi"


def test_candidates_list_every_present_signal_in_order():
    signals = LanguageSignals(html_lang="de", url_path_code="fr", tld_lang="da")
    sources = [c.source for c in resolver.candidates(signals)]
    assert sources == ["html_lang", "url_path_code", "tld_lang", "html_lang", "default"]


def test_to_language_name_variants():
    assert to_language_name("de-AT") == "German"
    assert to_language_name("pt_BR") == "Portuguese"
    assert to_language_name("da, en") == "Danish"
    assert to_language_name("sv-FI") == "Swedish"
    assert to_language_name("xx") is None
    assert to_language_name(None) is None
    assert to_language_name("") is None
