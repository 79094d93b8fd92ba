"""
One-time migration of the hand-written site into JSON documents.

Scrapes index.html, projects.html and projects/*.html with regular
expressions. This only has to understand the markup the old site actually
used; anything it cannot find is left empty rather than reported.
"""
import html
import re
from pathlib import Path

import data_manager

_SLIDE = re.compile(
    r'<div class="(slide[^"]*)"(?:\s+data-project="([^"]*)")?\s*>\s*'
    r'<img src="([^"]*)" alt="([^"]*)">'
)
_COMPANY_NAME    = re.compile(r'<div class="sidebar-header">\s*<h1>([^<]*)</h1>')
_SIDEBAR_HEADER  = re.compile(r'<div class="sidebar-header">([\s\S]*?)</div>')
_SIDEBAR_CONTENT = re.compile(r'<div class="sidebar-content">([\s\S]*?)<p class="copyright">')
_PARAGRAPH       = re.compile(r'<p(?:\s+class="([^"]*)")?>([\s\S]*?)</p>')
_ANCHOR          = re.compile(r'<a href="([^"]*)"[^>]*>([\s\S]*?)</a>')
_MAILTO          = re.compile(r'href="mailto:([^"]*)"')
_ADDRESS         = re.compile(r'<p class="contact-address">([\s\S]*?)</p>')
_MAP_SRC         = re.compile(r'src="([^"]*maps[^"]*)"')
_BR              = re.compile(r"<br\s*/?>")
_TAG             = re.compile(r"<[^>]+>")

_PROJECT_CARD = re.compile(
    r'<a href="projects/([^"]+)\.html" class="project-card">\s*'
    r'<img[^>]*src="([^"]*)"[^>]*alt="([^"]*)"[^>]*>\s*'
    r'<div class="project-info">\s*<h3>([^<]*)</h3>(?:\s*<p>([^<]*)</p>)?'
)

_PROJECT_NAME  = re.compile(r'<span class="project-name">([^<]*)</span>')
_GALLERY_SLIDE = re.compile(r'<div class="slide[^"]*">\s*<img src="([^"]*)" alt="([^"]*)">')
_INFO_BLOCK    = re.compile(r'<div class="slide-text">([\s\S]*?)</div>\s*</div>')
_INFO_SPAN     = re.compile(r"<span>([^<]*(?:<em>[^<]*</em>[^<]*)?)</span>")


def _text(fragment: str) -> str:
    """Plain text of a legacy HTML fragment: tags dropped, entities decoded."""
    return html.unescape(_TAG.sub("", fragment)).strip()


def _to_markdown_links(fragment: str) -> str:
    """Turn anchors into [text](url) and flatten the rest of the markup to text."""
    linked = _ANCHOR.sub(lambda m: f"[{_TAG.sub('', m.group(2)).strip()}]({m.group(1)})", fragment)
    return _text(linked)


def extract_sidebar(page_html: str) -> dict:
    sidebar = {
        "companyName": "",
        "email":       "",
        "address":     "",
        "mapUrl":      "",
        "links":       [],
        "paragraphs":  [],
    }

    name = _COMPANY_NAME.search(page_html)
    if name:
        sidebar["companyName"] = _text(name.group(1))

    header = _SIDEBAR_HEADER.search(page_html)
    if header:
        sidebar["links"] = [
            {"text": _text(text), "url": html.unescape(url)}
            for url, text in _ANCHOR.findall(header.group(1))
        ]

    content = _SIDEBAR_CONTENT.search(page_html)
    if not content:
        return sidebar
    content_html = content.group(1)

    for css_class, text in _PARAGRAPH.findall(content_html):
        if "contact" in css_class or "copyright" in css_class:
            continue
        if "iframe" in text:
            continue
        clean = _to_markdown_links(text)
        if clean:
            sidebar["paragraphs"].append(clean)

    email = _MAILTO.search(content_html)
    if email:
        sidebar["email"] = html.unescape(email.group(1))

    address = _ADDRESS.search(content_html)
    if address:
        sidebar["address"] = _text(_BR.sub("\n", address.group(1)))

    map_src = _MAP_SRC.search(content_html)
    if map_src:
        sidebar["mapUrl"] = html.unescape(map_src.group(1))

    return sidebar


def extract_homepage(page_html: str) -> dict:
    slides = []
    for css_class, project_link, image, name in _SLIDE.findall(page_html):
        slides.append({
            "id":          len(slides) + 1,
            "image":       html.unescape(image),
            "name":        html.unescape(name),
            "projectLink": html.unescape(project_link) or None,
            "isLight":     "light" in css_class.split(),
        })
    return {"slides": slides, "sidebar": extract_sidebar(page_html)}


def extract_projects_index(page_html: str) -> dict:
    projects = [
        {
            "slug":      slug,
            "thumbnail": html.unescape(thumbnail),
            "title":     _text(title),
            "subtitle":  _text(subtitle or "") or None,
        }
        for slug, thumbnail, _alt, title, subtitle in _PROJECT_CARD.findall(page_html)
    ]
    return {"projects": projects}


def extract_project(slug: str, page_html: str) -> dict:
    title = _PROJECT_NAME.search(page_html)
    images = [
        {"src": html.unescape(src), "alt": html.unescape(alt)}
        for src, alt in _GALLERY_SLIDE.findall(page_html)
    ]

    info = []
    block = _INFO_BLOCK.search(page_html)
    if block:
        for span in _INFO_SPAN.findall(block.group(1)):
            text = _text(span)
            if text:
                info.append(text)

    return {
        "slug":   slug,
        "title":  _text(title.group(1)) if title else slug,
        "images": images,
        "info":   info,
    }


def migrate(website_root: Path) -> dict[str, int]:
    """Convert the legacy pages under ``website_root`` and save them through the store.

    Returns how many slides, projects and project pages were migrated.
    """
    website_root = Path(website_root)

    homepage = extract_homepage((website_root / "index.html").read_text(encoding="utf-8"))
    data_manager.save_homepage(homepage)
    print(f"  Extracted {len(homepage['slides'])} slides")

    index = extract_projects_index((website_root / "projects.html").read_text(encoding="utf-8"))
    data_manager.save_projects_index(index)
    print(f"  Extracted {len(index['projects'])} projects")

    pages = 0
    projects_dir = website_root / "projects"
    if projects_dir.is_dir():
        for page in sorted(projects_dir.glob("*.html")):
            if not data_manager.is_valid_slug(page.stem):
                print(f"  Skipping {page.name}: not usable as a project slug")
                continue
            project = extract_project(page.stem, page.read_text(encoding="utf-8"))
            data_manager.save_project(page.stem, project)
            pages += 1
        print(f"  Migrated {pages} project pages")
    else:
        print("  No projects directory found")

    return {"slides": len(homepage["slides"]), "projects": len(index["projects"]), "pages": pages}
