"""Output filename resolution for critical CSS files."""

from critical_css_plugin.services.slug import webalize

NAME_PLACEHOLDER = "[name]"
HASH_PLACEHOLDER = "[hash]"


def resolve_output_filename(name: str, template: str, build_hash: str) -> str:
    """Turn a logical page name into a relative output filename.

    ``[name]`` is replaced by the slugified name; a template without it gets
    ``"<slug>."`` appended instead. ``[hash]`` is replaced by the build hash.
    Only the first ``[name]`` is substituted; every ``[hash]`` is.
    """

    slug = webalize(name)

    if NAME_PLACEHOLDER in template:
        filename = template.replace(NAME_PLACEHOLDER, slug, 1)
    else:
        filename = f"{template}{slug}."

    if HASH_PLACEHOLDER in filename:
        filename = filename.replace(HASH_PLACEHOLDER, build_hash)

    return filename
