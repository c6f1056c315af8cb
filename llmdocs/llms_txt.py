"""Generate llms.txt index files for a documentation directory."""

from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import urljoin

from pydantic import BaseModel

from .transform.cleanup import remove_badges, remove_comments, remove_frontmatter
from .transform.headings import find_headings

# Descriptions longer than this are cut at a word boundary
MAX_DESCRIPTION_CHARS = 200


class DocumentInfo(BaseModel):
    """A document listed in llms.txt."""

    path: Path
    title: str
    description: str = ""
    url: str


def _first_paragraph(content: str) -> str:
    for block in re.split(r"\n\s*\n", content):
        text = block.strip()
        if not text or text.startswith(("#", "```", "~~~", "|", "<", "![", "[![", "---")):
            continue
        text = re.sub(r"\s+", " ", text)
        text = re.sub(r"\[([^\]]*)\]\([^)]*\)", r"\1", text)
        if len(text) > MAX_DESCRIPTION_CHARS:
            text = text[:MAX_DESCRIPTION_CHARS].rsplit(" ", 1)[0].rstrip(".,;:") + "..."
        return text
    return ""


def describe_document(path: Path, docs_dir: Path, base_url: str | None = None) -> DocumentInfo:
    """Read a markdown file's title (first heading) and description (first paragraph)."""
    content = path.read_text(encoding="utf-8")
    content = remove_badges(remove_comments(remove_frontmatter(content)))

    headings = find_headings(content)
    title = headings[0].title if headings else path.stem.replace("-", " ").replace("_", " ").title()

    relative = path.relative_to(docs_dir).as_posix()
    url = urljoin(base_url, relative) if base_url else relative

    return DocumentInfo(
        path=path,
        title=title,
        description=_first_paragraph(content),
        url=url,
    )


def _priority(info: DocumentInfo) -> tuple[int, str]:
    # README / index pages lead, everything else follows by path.
    name = info.path.stem.lower()
    return (0 if name in {"readme", "index"} else 1, info.path.as_posix())


def generate_llms_txt(
    title: str,
    description: str | None,
    documents: list[DocumentInfo],
) -> str:
    """Render llms.txt content.

    Args:
        title: Project title for the top-level heading
        description: One-line summary rendered as a blockquote
        documents: Documents to list

    Returns:
        llms.txt content as string
    """
    lines = [f"# {title}", ""]

    if description:
        lines.append(f"> {description}")
        lines.append("")

    if documents:
        lines.append("## Documentation")
        lines.append("")
        for info in sorted(documents, key=_priority):
            entry = f"- [{info.title}]({info.url})"
            if info.description:
                entry += f": {info.description}"
            lines.append(entry)
        lines.append("")

    return "\n".join(lines)


def build_llms_txt(
    files: list[Path],
    docs_dir: Path,
    title: str | None = None,
    description: str | None = None,
    base_url: str | None = None,
) -> str:
    """Describe ``files`` and render llms.txt, deriving title/description from the README."""
    documents = [describe_document(path, docs_dir, base_url) for path in files]

    lead = next((d for d in sorted(documents, key=_priority) if _priority(d)[0] == 0), None)
    if title is None:
        title = lead.title if lead else docs_dir.resolve().name
    if description is None and lead is not None:
        description = lead.description or None

    return generate_llms_txt(title, description, documents)


def write_llms_txt(content: str, output: Path) -> Path:
    """Write llms.txt content; ``output`` may be a directory or a file path."""
    path = output / "llms.txt" if output.is_dir() else output
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
