"""
Upload pipeline: validate an uploaded image, resize it to a preset and write
it under the website's images/ tree.
"""
import importlib
import os
import re
import time
from pathlib import Path

from PIL import Image, ImageOps
from werkzeug.utils import secure_filename

import site_config
from data_manager import is_valid_slug
from presets import PRESETS


class UploadError(ValueError):
    """Raised when an upload cannot be turned into a site image."""


def allowed_upload(filename: str, mimetype: str | None) -> bool:
    """Both the file extension and the MIME subtype must name an image type we accept."""
    allowed = site_config.SITE_CONFIG["allowed_extensions"]
    if not filename or "." not in filename:
        return False
    ext     = filename.rsplit(".", 1)[1].lower()
    subtype = (mimetype or "").split("/")[-1].lower()
    return ext in allowed and subtype in allowed


def open_image(path: str) -> Image.Image:
    image = Image.open(path)
    image = ImageOps.exif_transpose(image)
    return image.convert("RGB")


def save_image(image: Image.Image, path: str, quality: int = 85) -> None:
    image.save(path, "JPEG", quality=quality, progressive=False, optimize=True)


def verify_image(path: str) -> None:
    """Raise UploadError unless ``path`` decodes as an image."""
    try:
        with Image.open(path) as probe:
            probe.verify()  # raises on corrupt / non-image files
    except Exception as e:
        raise UploadError("The uploaded file does not appear to be a valid image.") from e


def _run_preprocessors(image: Image.Image, preset: dict) -> Image.Image:
    for name in preset.get("preprocessors", []):
        mod   = importlib.import_module(f"preprocessors.{name}")
        image = mod.process(image, preset)
    return image


def _output_name(preset: dict, original_filename: str) -> str:
    stem = Path(original_filename or "").stem
    base = secure_filename(stem) or "image"
    return preset["filename"].format(
        millis=int(time.time() * 1000),
        base=base,
        safe_base=re.sub(r"[^a-z0-9]", "-", base.lower()),
    )


def process_upload(
    temp_path: str,
    original_filename: str,
    preset_name: str,
    slug: str | None = None,
) -> str:
    """
    Resize ``temp_path`` according to ``preset_name`` and store it on the site.

    The temporary upload is deleted whether or not processing succeeds.
    Returns the path to embed in the documents, relative to the page that
    will show the image.
    """
    try:
        preset = PRESETS.get(preset_name)
        if preset is None:
            raise UploadError(f"Unknown image preset: {preset_name}")
        if preset["needs_slug"] and not is_valid_slug(slug):
            raise UploadError(f"Invalid project slug: {slug!r}")

        verify_image(temp_path)
        try:
            image = _run_preprocessors(open_image(temp_path), preset)
        except OSError as e:
            raise UploadError(f"Could not decode the uploaded image: {e}") from e

        rel_dir  = preset["output_dir"].format(slug=slug or "")
        filename = _output_name(preset, original_filename)
        out_dir  = site_config.website_root() / rel_dir
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = out_dir / filename

        try:
            save_image(image, str(out_path), quality=preset["quality"])
        except Exception:
            out_path.unlink(missing_ok=True)  # no half-written images on the site
            raise
    finally:
        if os.path.exists(temp_path):
            os.remove(temp_path)

    return f"{preset['link_prefix']}{rel_dir}/{filename}"
