from adcopy.text.normalize import clean_optional, normalize_text, strip_tags


def test_html_entities():
    assert normalize_text("Bikes &amp; Parts | Velo&#39;s") == "Bikes & Parts | Velo's"
    assert normalize_text("&ldquo;Free delivery&rdquo;") == "“Free delivery”"
    assert normalize_text("Ab 499&nbsp;€") == "Ab 499 €"


def test_title_whitespace_collapsed():
    assert normalize_text("\n    Shop   E-Bikes\n\t | Radhaus  ") == "Shop E-Bikes | Radhaus"


def test_nfc_composes_accents():
    decomposed = "Fahrra\u0308der"
    assert normalize_text(decomposed) == "Fahrräder"
    assert len(normalize_text(decomposed)) == 9


def test_numeric_entities():
    assert normalize_text("It&#8217;s") == "It’s"
    assert normalize_text("&#8220;Hej&#8221;") == "“Hej”"


def test_strip_tags():
    assert strip_tags("Nye <span class='x'>cykler</span>") == "Nye cykler"


def test_clean_optional():
    assert clean_optional(None) is None
    assert clean_optional("   ") is None
    assert clean_optional(" Køb &amp; spar ") == "Køb & spar"
