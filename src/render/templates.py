# src/render/templates.py — v1
"""LaTeX document template and LuaTeX runtime configuration."""

from __future__ import annotations

from collections.abc import Iterable

# Loaded with `lualatex -lua`. Makes the engine stop at the first error and
# print error strings to the terminal so they end up in captured stdout.
LUA_CONFIG = r"""
texconfig.file_line_error = true
texconfig.halt_on_error = true
texconfig.interaction = 1

callback.register('show_error_message', function(...)
    texio.write_nl('term and log', status.lasterrorstring)
    texio.write('term', '.\n')
end)

callback.register('show_lua_error_hook', function(...)
    texio.write_nl('term and log', status.lastluaerrorstring)
    texio.write('term', '.\n')
end)
"""


def build_document(
    source: str,
    environment: str,
    document_class: str = "standalone",
    class_options: str = "tikz",
    packages: Iterable[str] = ("tikz-cd",),
) -> str:
    """Wrap diagram source in a minimal standalone document."""
    options = f"[{class_options}]" if class_options else ""
    lines = [f"\\documentclass{options}{{{document_class}}}"]
    lines.extend(f"\\usepackage{{{pkg}}}" for pkg in packages if pkg)
    lines += [
        "",
        "\\begin{document}",
        f"\\begin{{{environment}}}",
        source.strip(),
        f"\\end{{{environment}}}",
        "\\end{document}",
        "",
    ]
    return "\n".join(lines)
