"""Tests for admanifest typography."""

import base64

from admanifest.typography import (
    apply_typography,
    classify_family,
    font_css,
    font_family_from_bytes,
    font_format,
    font_source_url,
    is_custom_font,
    layer_tags,
    register_font,
    rewire_layers,
)


WOFF2_B64 = base64.b64encode(b"wOF2" + b"\x00" * 28).decode("ascii")


def _font(family, **extra):
    font = {"fontFamily": family, "fontFileBase64": WOFF2_B64}
    font.update(extra)
    return font


def _layer_font(manifest, name):
    for layer in manifest["layers"]:
        if layer["name"] == name:
            return layer.get("fontFamily")
    raise KeyError(name)


class TestFontData:
    def test_format_sniffed_from_header(self):
        assert font_format({"fontFileBase64": WOFF2_B64}) == "woff2"

    def test_declared_format_wins(self):
        assert font_format({"fontFileBase64": WOFF2_B64, "fontFormat": "woff"}) == "woff"

    def test_default_format(self):
        assert font_format({"fontUrl": "https://x/f"}) == "ttf"

    def test_data_uri(self):
        assert font_source_url(_font("Brand")) == f"data:font/woff2;base64,{WOFF2_B64}"

    def test_hosted_url(self):
        assert font_source_url({"fontUrl": "https://x/f.woff"}) == "https://x/f.woff"

    def test_system_font_not_custom(self):
        assert not is_custom_font({"fontFamily": "Arial", "isSystemFont": True, "fontUrl": "x"})

    def test_font_without_data_not_custom(self):
        assert not is_custom_font({"fontFamily": "Brand"})
        assert not is_custom_font(None)

    def test_unreadable_font_bytes(self):
        assert font_family_from_bytes(b"not a font") is None


class TestRegisterFont:
    def test_registers_declaration(self, manifest):
        assert register_font(manifest, _font("Brand"))
        assert manifest["settings"]["webFonts"] == [{
            "fontFamily": "Brand", "style": "normal",
            "url": f"data:font/woff2;base64,{WOFF2_B64}",
        }]

    def test_registration_is_idempotent(self, manifest):
        register_font(manifest, _font("Brand"))
        assert not register_font(manifest, _font("Brand"))
        assert len(manifest["settings"]["webFonts"]) == 1

    def test_first_registration_wins(self, manifest):
        register_font(manifest, {"fontFamily": "Brand", "fontUrl": "https://a/1.woff"})
        register_font(manifest, {"fontFamily": "Brand", "fontUrl": "https://a/2.woff"})
        assert manifest["settings"]["webFonts"][0]["url"] == "https://a/1.woff"

    def test_system_font_skipped(self, manifest):
        assert not register_font(manifest, {"fontFamily": "Arial", "isSystemFont": True})
        assert manifest["settings"]["webFonts"] == []

    def test_no_settings_warns(self):
        warnings = []
        assert not register_font({"layers": []}, _font("Brand"), warnings)
        assert len(warnings) == 1

    def test_unnamed_unreadable_font_warns(self, manifest):
        warnings = []
        assert not register_font(manifest, {"fontFileBase64": WOFF2_B64}, warnings)
        assert warnings == ["Font has no family name; not registered"]


class TestRewire:
    def test_tags_split_camel_case(self):
        assert layer_tags({"name": "cta_bg", "className": "ctaCopy"}) == {"cta", "bg", "copy"}

    def test_classify(self):
        assert classify_family({"maincopy"}, "H", "B") == "H"
        assert classify_family({"subcopy"}, "H", "B") == "B"
        assert classify_family({"logo"}, "H", "B") is None

    def test_cta_wins_over_body(self):
        assert classify_family({"body", "button"}, "H", "B") == "H"

    def test_rewire_sample(self, manifest):
        changed = rewire_layers(manifest, "Head", "Body")
        assert changed == 3
        assert _layer_font(manifest, "maincopy") == "Head"
        assert _layer_font(manifest, "subcopy") == "Body"
        assert _layer_font(manifest, "cta") == "Head"
        assert _layer_font(manifest, "logo") is None

    def test_rewire_without_families(self, manifest):
        assert rewire_layers(manifest, None, None) == 0

    def test_non_text_layers_untouched(self):
        manifest = {"layers": [{"name": "headline", "fileType": "png"}]}
        rewire_layers(manifest, "Head", None)
        assert "fontFamily" not in manifest["layers"][0]


class TestApplyTypography:
    def test_body_defaults_to_header(self, manifest):
        apply_typography(manifest, {"headerFont": _font("Brand")})
        assert _layer_font(manifest, "subcopy") == "Brand"
        assert len(manifest["settings"]["webFonts"]) == 1

    def test_system_font_still_assigned(self, manifest):
        apply_typography(manifest, {
            "headerFont": _font("Brand"),
            "bodyFont": {"fontFamily": "Georgia", "isSystemFont": True},
        })
        assert _layer_font(manifest, "subcopy") == "Georgia"
        assert [d["fontFamily"] for d in manifest["settings"]["webFonts"]] == ["Brand"]


class TestFontCss:
    def test_empty(self):
        assert font_css(None) == ""
        assert font_css({}) == ""

    def test_inline_font_face_and_bindings(self):
        css = font_css({"headerFont": _font("Brand"), "bodyFont": {"fontFamily": "Georgia", "isSystemFont": True}})
        assert css.startswith("<style>")
        assert css.count("@font-face") == 1
        assert "format('woff2')" in css
        assert ".maincopy, .ctaCopy {\n  font-family: 'Brand', sans-serif !important;" in css
        assert ".subcopy {\n  font-family: 'Georgia', sans-serif !important;" in css

    def test_same_family_declared_once(self):
        css = font_css({"headerFont": _font("Brand"), "bodyFont": _font("Brand")})
        assert css.count("@font-face") == 1

    def test_stylesheet_link_variant(self):
        css = font_css({"headerFont": _font("Brand")}, stylesheet_url="https://fonts.example/brand.css")
        assert css.startswith('<link rel="stylesheet" href="https://fonts.example/brand.css">')
        assert "@font-face" not in css
        assert ".maincopy, .ctaCopy" in css
