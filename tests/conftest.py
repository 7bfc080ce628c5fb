import json

import pytest


LAYOUT = """<!doctype html>
<html lang="{{ lang }}">
<head>
<title>{% block title %}{{ site_title }}{% endblock %}</title>
<link rel="canonical" href="{{ canonical }}">
{% for alt in alternates %}<link rel="alternate" hreflang="{{ alt.lang }}" href="{{ alt.url }}">
{% endfor %}</head>
<body>{% block content %}{% endblock %}</body>
</html>
"""

INDEX_PAGE = """{% extends "layouts/base.html" %}
{% block content %}<h1>{{ greeting }}</h1>{% endblock %}
"""

ABOUT_PAGE = """---
section: about
---
{% extends "layouts/base.html" %}
{% block content %}<p data-section="{{ section }}">{{ about.body | markdown }}</p>{% endblock %}
"""


def write_json(path, data):
    path.write_text(json.dumps(data), encoding='utf-8')


@pytest.fixture
def site(tmp_path):
    """A small site tree: two pages, two languages, a nested asset tree."""
    src = tmp_path / "src"
    pages = src / "pages"
    (pages / "layouts").mkdir(parents=True)
    (pages / "layouts" / "base.html").write_text(LAYOUT, encoding='utf-8')
    (pages / "index.html").write_text(INDEX_PAGE, encoding='utf-8')
    (pages / "about.html").write_text(ABOUT_PAGE, encoding='utf-8')
    (pages / "notes.txt").write_text("not a page", encoding='utf-8')

    translations = src / "translations"
    translations.mkdir()
    write_json(translations / "en.json", {
        "site_title": "Example",
        "greeting": "Hello",
        "about": {"body": "We make **sites**."},
    })
    write_json(translations / "fr.json", {
        "site_title": "Exemple",
        "greeting": "Bonjour",
        "about": {"body": "Nous faisons des **sites**."},
    })

    assets = src / "assets"
    (assets / "css").mkdir(parents=True)
    (assets / "css" / "site.css").write_text("body { margin: 0; }\n", encoding='utf-8')
    (assets / "logo.bin").write_bytes(bytes(range(256)))

    return {
        'pages_dir': pages,
        'translations_dir': translations,
        'assets_dir': assets,
        'output_dir': tmp_path / "dist",
    }
