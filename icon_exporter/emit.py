"""
Output artifacts for an export run.

Every artifact lists icons in the order it receives them, which is the
sorted identifier order produced by `assign_icons`.
"""

from __future__ import annotations

import hashlib
from typing import List, Sequence

from .config import ExporterConfiguration
from .models import AssignmentResult, CopyRemoteFile, NormalizedIcon, OutputFile, TextFile
from .rules import ASSET_DIR

FONT_SCRIPT_HEADER = '''\
"""Build {font_name}.ttf from the exported SVG icons.

Run with: fontforge -script build_font.py
"""

import fontforge

ICONS = [
'''

FONT_SCRIPT_FOOTER = '''\
]

font = fontforge.font()
font.encoding = "UnicodeFull"
font.familyname = "{font_name}"
font.fontname = "{font_name}-Regular"
font.fullname = "{font_name} Regular"

for name, codepoint in ICONS:
    glyph = font.createChar(codepoint, name)
    glyph.importOutlines("{asset_dir}/" + name + ".svg")
    glyph.removeOverlap()
    glyph.correctDirection()

font.generate("{font_name}.ttf")
'''


def _sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def text_file(file_name: str, content: str, relative_path: str = ".") -> TextFile:
    return TextFile(relative_path=relative_path, file_name=file_name, content=content, sha256=_sha256_hex(content))


def svg_files(icons: Sequence[NormalizedIcon], asset_dir: str = ASSET_DIR) -> List[CopyRemoteFile]:
    return [
        CopyRemoteFile(relative_path=asset_dir, file_name=f"{icon.identifier}.svg", url=icon.resource_url)
        for icon in icons
    ]


def constants_source(icons: Sequence[NormalizedIcon], class_name: str = "Icons") -> str:
    lines = [
        "# Generated by icon-exporter. Do not edit.",
        "",
        "",
        f"class {class_name}:",
    ]
    lines += [f"    {icon.identifier} = {icon.hex_codepoint}" for icon in icons]
    if not icons:
        lines.append("    pass")
    return "\n".join(lines) + "\n"


def font_script(icons: Sequence[NormalizedIcon], font_name: str = "Icons", asset_dir: str = ASSET_DIR) -> str:
    body = "".join(f'    ("{icon.identifier}", {icon.hex_codepoint}),\n' for icon in icons)
    return (
        FONT_SCRIPT_HEADER.format(font_name=font_name)
        + body
        + FONT_SCRIPT_FOOTER.format(font_name=font_name, asset_dir=asset_dir.rstrip("/"))
    )


def documentation(icons: Sequence[NormalizedIcon], font_name: str = "Icons", asset_dir: str = ASSET_DIR) -> str:
    lines = [
        f"# {font_name}",
        "",
        f"{len(icons)} icons.",
        "",
        "| Name | Codepoint | File |",
        "|---|---|---|",
    ]
    asset_dir = asset_dir.rstrip("/")
    for icon in icons:
        lines.append(f"| `{icon.identifier}` | `{icon.hex_codepoint}` | `{asset_dir}/{icon.identifier}.svg` |")
    return "\n".join(lines) + "\n"


def build_output(result: AssignmentResult, config: ExporterConfiguration) -> List[OutputFile]:
    icons = result.icons
    files: List[OutputFile] = list(svg_files(icons, config.asset_dir))
    files.append(text_file("icons.py", constants_source(icons, config.class_name)))
    files.append(text_file("build_font.py", font_script(icons, config.font_name, config.asset_dir)))
    files.append(text_file("ICONS.md", documentation(icons, config.font_name, config.asset_dir)))
    return files
