import os
import tempfile
import traceback
from datetime import datetime

from flask import Flask, jsonify, redirect, request, send_from_directory

import data_manager
import generator
import site_config
from image_processor import UploadError, allowed_upload, process_upload

app = Flask(__name__, static_folder=None)
app.config["MAX_CONTENT_LENGTH"] = site_config.SITE_CONFIG["max_upload_bytes"]


# ── Helpers ───────────────────────────────────────────────────────────────────

def _log_error(context: str, exc: Exception) -> None:
    """Write the last error with timestamp to the error log (no request data)."""
    with open(site_config.error_log_path(), "w", encoding="utf-8") as f:
        f.write(f"[{datetime.now().isoformat(timespec='seconds')}] {context}\n\n")
        if exc.__traceback__:
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=f)
        else:
            f.write(f"{type(exc).__name__}: {exc}\n")


def _failure(context: str, exc: Exception):
    _log_error(context, exc)
    return jsonify({"error": str(exc)}), 500


def _ok(**extra):
    return jsonify({"success": True, **extra})


def _handle_upload(preset: str, slug: str | None = None):
    """Stage the multipart ``image`` field in a temp dir and run it through a preset."""
    file = request.files.get("image")
    if not file or not file.filename:
        raise UploadError("No file received.")
    if not allowed_upload(file.filename, file.mimetype):
        raise UploadError("Only image files are allowed")

    # The temp dir is removed afterwards, so nothing but the processed image stays on disk
    with tempfile.TemporaryDirectory() as tmpdir:
        temp_path = os.path.join(tmpdir, "upload")
        file.save(temp_path)
        path = process_upload(temp_path, file.filename, preset, slug=slug)
    return _ok(path=path)


# ── Homepage + sidebar ────────────────────────────────────────────────────────

@app.route("/api/homepage", methods=["GET"])
def get_homepage():
    try:
        return jsonify(data_manager.get_homepage())
    except Exception as e:
        return _failure("GET /api/homepage", e)


@app.route("/api/homepage", methods=["PUT"])
def put_homepage():
    try:
        data_manager.save_homepage(request.get_json())
        generator.generate_homepage()
        return _ok()
    except Exception as e:
        return _failure("PUT /api/homepage", e)


@app.route("/api/sidebar", methods=["GET"])
def get_sidebar():
    try:
        return jsonify(data_manager.get_sidebar())
    except Exception as e:
        return _failure("GET /api/sidebar", e)


@app.route("/api/sidebar", methods=["PUT"])
def put_sidebar():
    try:
        data_manager.save_sidebar(request.get_json())
        generator.generate_homepage()
        return _ok()
    except Exception as e:
        return _failure("PUT /api/sidebar", e)


# ── Projects ──────────────────────────────────────────────────────────────────

@app.route("/api/projects", methods=["GET"])
def get_projects():
    try:
        return jsonify(data_manager.get_projects_index())
    except Exception as e:
        return _failure("GET /api/projects", e)


@app.route("/api/projects", methods=["PUT"])
def put_projects():
    try:
        data_manager.save_projects_index(request.get_json())
        generator.generate_projects_index()
        return _ok()
    except Exception as e:
        return _failure("PUT /api/projects", e)


@app.route("/api/projects", methods=["POST"])
def create_project():
    try:
        body = request.get_json() or {}
        slug = data_manager.create_project(body.get("title", ""), body.get("subtitle"))
        generator.generate_projects_index()
        generator.generate_project_page(slug)
        return _ok(slug=slug)
    except Exception as e:
        return _failure("POST /api/projects", e)


@app.route("/api/projects/<slug>", methods=["GET"])
def get_project(slug):
    try:
        data = data_manager.get_project(slug)
        if data is None:
            return jsonify({"error": "Project not found"}), 404
        return jsonify(data)
    except Exception as e:
        return _failure(f"GET /api/projects/{slug}", e)


@app.route("/api/projects/<slug>", methods=["PUT"])
def put_project(slug):
    try:
        data_manager.save_project(slug, request.get_json())
        generator.generate_project_page(slug)
        return _ok()
    except Exception as e:
        return _failure(f"PUT /api/projects/{slug}", e)


@app.route("/api/projects/<slug>", methods=["DELETE"])
def delete_project(slug):
    try:
        data_manager.remove_project(slug)
        generator.remove_project_page(slug)
        generator.generate_projects_index()
        return _ok()
    except Exception as e:
        return _failure(f"DELETE /api/projects/{slug}", e)


# ── Uploads ───────────────────────────────────────────────────────────────────

@app.route("/api/upload/slideshow", methods=["POST"])
def upload_slideshow():
    try:
        return _handle_upload("slideshow")
    except Exception as e:
        return _failure("POST /api/upload/slideshow", e)


@app.route("/api/upload/thumbnail", methods=["POST"])
def upload_thumbnail():
    try:
        return _handle_upload("thumbnail")
    except Exception as e:
        return _failure("POST /api/upload/thumbnail", e)


@app.route("/api/upload/project/<slug>", methods=["POST"])
def upload_project_image(slug):
    try:
        return _handle_upload("gallery", slug=slug)
    except Exception as e:
        return _failure(f"POST /api/upload/project/{slug}", e)


# ── Regeneration ──────────────────────────────────────────────────────────────

@app.route("/api/generate", methods=["POST"])
def generate_all():
    try:
        generator.generate_all()
        return _ok()
    except Exception as e:
        return _failure("POST /api/generate", e)


@app.route("/api/generate/homepage", methods=["POST"])
def generate_homepage():
    try:
        generator.generate_homepage()
        return _ok()
    except Exception as e:
        return _failure("POST /api/generate/homepage", e)


@app.route("/api/generate/projects", methods=["POST"])
def generate_projects():
    try:
        generator.generate_projects_index()
        return _ok()
    except Exception as e:
        return _failure("POST /api/generate/projects", e)


@app.route("/api/generate/project/<slug>", methods=["POST"])
def generate_project(slug):
    try:
        generator.generate_project_page(slug)
        return _ok()
    except Exception as e:
        return _failure(f"POST /api/generate/project/{slug}", e)


# ── Static files ──────────────────────────────────────────────────────────────

@app.route("/")
def index():
    return redirect("/admin/")


@app.route("/admin/")
@app.route("/admin/<path:filename>")
def admin(filename="index.html"):
    return send_from_directory(site_config.admin_dir(), filename)


@app.route("/<path:filename>")
def website(filename):
    """Generated pages and images, for previewing the site through the CMS."""
    return send_from_directory(site_config.website_root(), filename)


if __name__ == "__main__":
    port = site_config.server_port()
    print(f"Admin:   http://localhost:{port}/admin/")
    print(f"Website: http://localhost:{port}/index.html")
    app.run(debug=True, port=port)
