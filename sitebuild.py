#!/usr/bin/env python3
"""
Build script for the multilingual static site.

Renders every page template in src/pages/ once per translation file in
src/translations/ using Jinja2, copies src/assets/ alongside, and writes a
language-detecting redirect page at the site root.

Usage:
    python sitebuild.py                                # Build to dist/
    SITE_URL=https://example.com python sitebuild.py   # Absolute canonical URLs
"""

import json
import os
import re
import shutil
from pathlib import Path

import frontmatter
from jinja2 import Environment, FileSystemLoader
import markdown
from markupsafe import Markup, escape


# --- Configuration ---

SRC_DIR = Path("src")
PAGES_DIR = SRC_DIR / "pages"
TRANSLATIONS_DIR = SRC_DIR / "translations"
ASSETS_DIR = SRC_DIR / "assets"
OUTPUT_DIR = Path("dist")

PAGE_EXTENSION = ".html"
TRANSLATION_EXTENSION = ".json"
INDEX_PAGE = "index"
DEFAULT_LANGUAGE = "en"
BASE_URL_ENV = "SITE_URL"

SCHEME_RE = re.compile(r'^([a-zA-Z][a-zA-Z0-9+.-]*:)/+')


# --- Utility Functions ---

def get_base_url(environ=None) -> str:
    """Read the site base URL from the environment, without trailing slashes."""
    environ = os.environ if environ is None else environ
    return (environ.get(BASE_URL_ENV) or '').rstrip('/')


def normalize_url(url: str) -> str:
    """Collapse repeated slashes, keeping exactly two after a scheme."""
    prefix = ''
    match = SCHEME_RE.match(url)
    if match:
        prefix = match.group(1) + '//'
        url = url[match.end():]
    return prefix + re.sub(r'/{2,}', '/', url)


def build_url(base: str, lang_code: str, page_name: str) -> str:
    """
    URL of a page in one language.

    The index page lives at the language root; every other page gets its
    own directory:
        build_url("https://example.com", "fr", "about") -> "https://example.com/fr/about/"
        build_url("", "en", "index") -> "/en/"
    """
    page_path = '' if page_name == INDEX_PAGE else f"{page_name}/"
    return normalize_url(f"{base}/{lang_code}/{page_path}")


def render_markdown(text: str) -> str:
    """Render markdown text to HTML."""
    return markdown.markdown(text, extensions=['extra'])


def copy_recursive(src: Path, dest: Path) -> None:
    """
    Copy a file or directory tree byte-for-byte, overwriting existing files.

    A missing source is not an error; there is simply nothing to copy.
    """
    if not src.exists():
        return
    if src.is_dir():
        dest.mkdir(parents=True, exist_ok=True)
        for child in sorted(src.iterdir()):
            copy_recursive(child, dest / child.name)
    else:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dest)


# --- Loading ---

def load_translations(translations_dir: Path = TRANSLATIONS_DIR) -> list:
    """
    Load every translation file as a language entry.

    Returns a list of {'code': ..., 'data': ...} dicts in file-name order.
    The code is the file's base name as written (no case normalization).
    """
    languages = []
    for path in sorted(translations_dir.iterdir()):
        if not path.is_file() or path.suffix != TRANSLATION_EXTENSION:
            continue
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: translation file must contain a JSON object")
        languages.append({'code': path.stem, 'data': data})
    return languages


def load_pages(pages_dir: Path = PAGES_DIR) -> list:
    """
    Load the top-level page templates.

    Each page may start with a YAML front-matter block; its metadata is
    kept apart from the template body. Subdirectories (layouts, partials)
    are not pages.
    """
    pages = []
    for path in sorted(pages_dir.iterdir()):
        if not path.is_file() or path.suffix != PAGE_EXTENSION:
            continue
        text = path.read_text(encoding='utf-8')
        content, metadata = text, {}
        if frontmatter.checks(text):
            post = frontmatter.loads(text)
            content, metadata = post.content, dict(post.metadata)
        pages.append({
            'name': path.stem,
            'content': content,
            'metadata': metadata,
        })
    return pages


# --- Rendering ---

def create_jinja_env(pages_dir: Path = PAGES_DIR) -> Environment:
    """Create Jinja2 environment with custom filters."""
    env = Environment(
        loader=FileSystemLoader(pages_dir),
        autoescape=True,
        keep_trailing_newline=True,
    )
    env.filters['markdown'] = lambda text: Markup(render_markdown(text or ''))
    return env


def build_alternates(languages: list, page_name: str, base: str) -> list:
    """One {'lang', 'url'} link per known language, current one included."""
    return [
        {'lang': l['code'], 'url': build_url(base, l['code'], page_name)}
        for l in languages
    ]


def build_view(language: dict, page_name: str, languages: list, base: str, metadata: dict = None) -> dict:
    """
    Template context for one (language, page) render.

    Precedence, lowest first: page front matter, translation data, derived
    fields. Derived fields always win on a key collision.
    """
    return {
        **(metadata or {}),
        **language['data'],
        'lang': language['code'],
        'alternates': build_alternates(languages, page_name, base),
        'canonical': build_url(base, language['code'], page_name),
    }


def render_page(env: Environment, page: dict, language: dict, languages: list, base: str) -> str:
    """Render one page template for one language."""
    view = build_view(language, page['name'], languages, base, page.get('metadata'))
    template = env.from_string(page['content'])
    return template.render(view)


def page_output_dir(lang_dir: Path, page_name: str) -> Path:
    """The index page maps to the language root, others to <lang>/<page>/."""
    if page_name == INDEX_PAGE:
        return lang_dir
    return lang_dir / page_name


def render_root_index(languages: list, default_lang: str = DEFAULT_LANGUAGE) -> str:
    """
    Root page that redirects the browser to its preferred language.

    The supported list is exactly the loaded codes, in load order. Without
    JavaScript a plain list of language links is shown instead.
    """
    codes = [l['code'] for l in languages]
    links = '\n'.join(
        f'      <li><a href="/{escape(code)}/">{escape(code.upper())}</a></li>'
        for code in codes
    )
    return f'''<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width,initial-scale=1">
  <title>Redirecting...</title>
</head>
<body>
  <script>
    (function() {{
      var supported = {json.dumps(codes)};
      var browserLang = (navigator.language || navigator.userLanguage || {json.dumps(default_lang)}).slice(0, 2).toLowerCase();
      if (supported.indexOf(browserLang) === -1) browserLang = {json.dumps(default_lang)};
      window.location.replace('/' + browserLang + '/');
    }})();
  </script>
  <noscript>
    <h1>Choose your language</h1>
    <ul>
{links}
    </ul>
  </noscript>
</body>
</html>
'''


# --- Build Functions ---

def build_language_version(
    env: Environment,
    language: dict,
    pages: list,
    all_languages: list,
    base_url: str,
    output_dir: Path,
    assets_dir: Path,
):
    """Build every page of a single language version of the site."""
    lang = language['code']
    lang_dir = output_dir / lang
    lang_dir.mkdir(parents=True, exist_ok=True)

    if assets_dir.exists():
        copy_recursive(assets_dir, lang_dir / "assets")
        print(f"[{lang}] Copied assets -> {lang_dir / 'assets'}")

    for page in pages:
        page_dir = page_output_dir(lang_dir, page['name'])
        page_dir.mkdir(parents=True, exist_ok=True)
        html = render_page(env, page, language, all_languages, base_url)
        (page_dir / "index.html").write_text(html, encoding='utf-8')
        print(f"[{lang}] Built: {(page_dir / 'index.html').relative_to(lang_dir).as_posix()}")


def build_site(
    base_url: str = None,
    pages_dir: Path = PAGES_DIR,
    translations_dir: Path = TRANSLATIONS_DIR,
    assets_dir: Path = ASSETS_DIR,
    output_dir: Path = OUTPUT_DIR,
) -> list:
    """
    Build the complete static site in all languages.

    The previous output directory is removed first, so languages whose
    translation file is gone disappear from the output. Returns the
    language codes built, in load order.
    """
    if base_url is None:
        base_url = get_base_url()
    base_url = base_url.rstrip('/')

    languages = load_translations(translations_dir)

    # Clean and create output directory
    if output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True)

    if assets_dir.exists():
        copy_recursive(assets_dir, output_dir / "assets")
        print(f"Copied assets -> {output_dir / 'assets'}")

    pages = load_pages(pages_dir)
    env = create_jinja_env(pages_dir)

    for language in languages:
        build_language_version(
            env=env,
            language=language,
            pages=pages,
            all_languages=languages,
            base_url=base_url,
            output_dir=output_dir,
            assets_dir=assets_dir,
        )

    codes = [l['code'] for l in languages]
    if DEFAULT_LANGUAGE not in codes:
        print(f"Warning: fallback language '{DEFAULT_LANGUAGE}' has no translation file; "
              f"the root redirect may point to a missing /{DEFAULT_LANGUAGE}/")

    (output_dir / "index.html").write_text(render_root_index(languages), encoding='utf-8')

    print(f"Build complete — generated {', '.join(codes)}")
    return codes


# --- Main ---

def main() -> int:
    build_site(base_url=get_base_url())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
