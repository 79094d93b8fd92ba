# ─────────────────────────────────────────────────────────────────────────────
#  Image preset registry
#
#  Each upload endpoint maps to one preset. Every preset resizes to fit inside
#  width × height (never enlarging) and re-encodes as baseline JPEG.
#
#  Per-preset config fields:
#    width, height   — bounding box for the "fit inside" resize
#    quality         — JPEG quality (1–95)
#    output_dir      — destination folder, relative to the website root;
#                      may reference {slug}
#    filename        — output file name template; may reference
#                      {millis}, {base}, {safe_base}
#    link_prefix     — prepended to the returned path (project pages live one
#                      folder deeper than the homepage)
#    needs_slug      — whether the preset is bound to a project
#    preprocessors   — ordered list of preprocessor module names to run
# ─────────────────────────────────────────────────────────────────────────────

_DEFAULT_PREPROCESSORS = ["resize"]

_DEFAULT_FLAGS = {
    "quality":       85,
    "link_prefix":   "",
    "needs_slug":    False,
    "preprocessors": _DEFAULT_PREPROCESSORS,
}

PRESETS: dict[str, dict] = {

    "slideshow": {
        **_DEFAULT_FLAGS,
        "width":      1920,
        "height":     1080,
        "output_dir": "images/slideshow",
        "filename":   "{millis}-{base}-web.jpg",
    },

    "thumbnail": {
        **_DEFAULT_FLAGS,
        "width":      800,
        "height":     600,
        "output_dir": "images",
        "filename":   "{safe_base}.jpg",
    },

    "gallery": {
        **_DEFAULT_FLAGS,
        "width":       1600,
        "height":      1200,
        "output_dir":  "images/{slug}",
        "filename":    "{base}-web.jpg",
        "link_prefix": "../",
        "needs_slug":  True,
    },

}
