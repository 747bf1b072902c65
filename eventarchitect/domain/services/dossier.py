"""
Dossier assembly: a linear, paginated, read-only view of a project.

Pure functions. No I/O, no store access. Every id-reference is
resolved against the project; one that no longer resolves becomes an
explicit placeholder block instead of failing the assembly.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from eventarchitect.domain.constants import DOSSIER_FURNITURE_LIMIT
from eventarchitect.domain.models import Environment, Project


class DossierSection(str, Enum):
    """Dossier sections, in page order."""
    COVER = "cover"
    CONCEPT = "concept"
    MOODBOARD = "moodboard"
    CREST = "crest"
    ENVIRONMENTS = "environments"
    PRODUCTION = "production"


ALL_SECTIONS = tuple(DossierSection)


class BlockKind(str, Enum):
    HEADING = "heading"
    TEXT = "text"
    IMAGE = "image"
    LIST = "list"
    PALETTE = "palette"
    TABLE = "table"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class Block:
    """One typed piece of page content."""
    kind: BlockKind
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_placeholder(self) -> bool:
        return self.kind == BlockKind.PLACEHOLDER


@dataclass
class Page:
    number: int
    section: DossierSection
    title: str
    blocks: List[Block] = field(default_factory=list)

    @property
    def placeholders(self) -> List[Block]:
        return [b for b in self.blocks if b.is_placeholder]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["section"] = self.section.value
        data["blocks"] = [{"kind": b.kind.value, "data": b.data} for b in self.blocks]
        return data


def _heading(text: str) -> Block:
    return Block(BlockKind.HEADING, {"text": text})


def _text(label: str, text: Optional[str]) -> Block:
    return Block(BlockKind.TEXT, {"label": label, "text": text or ""})


def _image(label: str, uri: str) -> Block:
    return Block(BlockKind.IMAGE, {"label": label, "uri": uri})


def _list(label: str, items: Iterable[Any]) -> Block:
    return Block(BlockKind.LIST, {"label": label, "items": list(items)})


def _placeholder(missing_kind: str, missing_id: Optional[str], message: str) -> Block:
    return Block(BlockKind.PLACEHOLDER, {
        "missing_kind": missing_kind,
        "missing_id": missing_id,
        "message": message,
    })


# ---------------------------------------------------------------------------
# Section builders. Each returns (title, blocks) pairs; numbering is
# applied once all sections are assembled.
# ---------------------------------------------------------------------------

def _cover_pages(project: Project) -> List[tuple]:
    return [(project.name, [
        _heading(project.name),
        _text("type", project.type),
        _text("date", project.date),
        _text("location", project.location),
    ])]


def _concept_pages(project: Project) -> List[tuple]:
    blocks = [_heading("Concept and Briefing")]
    if project.briefing_transcript:
        blocks.append(_text("concept", project.briefing_transcript))
    else:
        blocks.append(_placeholder("briefing", None, "Concept not written yet"))

    if project.moodboards and project.moodboards[0].palette:
        blocks.append(Block(BlockKind.PALETTE, {
            "colors": [c.model_dump() for c in project.moodboards[0].palette],
        }))
    blocks.append(_list("keywords", list(project.keywords) + list(project.style_tags)))
    return [("Concept", blocks)]


def _moodboard_pages(project: Project) -> List[tuple]:
    pages = []
    for moodboard in project.moodboards:
        blocks = [_heading(moodboard.title), _text("story", moodboard.short_story)]
        if moodboard.collage_image_uri:
            blocks.append(_image("collage", moodboard.collage_image_uri))
        else:
            blocks.append(_placeholder("collage", moodboard.id, "Collage not generated"))
        blocks.append(Block(BlockKind.PALETTE, {"colors": [c.model_dump() for c in moodboard.palette]}))
        blocks.append(_list("textures", moodboard.textures))
        blocks.append(_list("objects", moodboard.objects))
        blocks.append(_list("symbols", moodboard.symbols))
        pages.append((moodboard.title, blocks))
    return pages


def _crest_pages(project: Project) -> List[tuple]:
    crest = project.crest
    if crest is None:
        return [("Visual Identity", [_placeholder("crest", None, "No crest created")])]

    option = crest.approved_option
    if option is None:
        return [("Visual Identity", [
            _heading(crest.initials),
            _placeholder("crest_option", crest.approved_option_id, "No approved crest option"),
        ])]

    return [("Visual Identity", [
        _heading(crest.initials),
        _text("style", option.style_name),
        _text("description", option.description),
        _image("default", option.png_uri),
        _image("gold", option.gold_png_uri),
        _image("monochrome", option.mono_png_uri),
        _text("usage", option.usage_suggestion),
        _list("usage_guide", crest.usage_guide),
    ])]


def _environment_blocks(project: Project, environment: Environment) -> List[Block]:
    blocks = [_heading(environment.name)]

    board = environment.primary_board
    approved = board.approved_variation if board else None
    if approved is not None:
        blocks.append(_image("proposal", approved.image_url))
        blocks.append(_text("summary", approved.client_summary))
    else:
        missing_id = board.approved_variation_id if board else None
        blocks.append(_placeholder("variation", missing_id, "Awaiting final render"))

    before = project.find_asset(environment.before_asset_id)
    if before is not None:
        blocks.append(_image("before", before.data))
    else:
        blocks.append(_placeholder("asset", environment.before_asset_id, "Before photo not available"))

    blocks.append(_text("goal", environment.goal))

    furniture = []
    for asset_id in environment.furniture_asset_ids[:DOSSIER_FURNITURE_LIMIT]:
        asset = project.find_asset(asset_id)
        if asset is not None:
            furniture.append(_image("furniture", asset.data))
        else:
            furniture.append(_placeholder("asset", asset_id, "Furniture item not available"))
    blocks.extend(furniture)

    overflow = len(environment.furniture_asset_ids) - DOSSIER_FURNITURE_LIMIT
    if overflow > 0:
        blocks.append(_text("furniture_overflow", f"+{overflow}"))
    return blocks


def _environment_pages(project: Project) -> List[tuple]:
    return [
        (f"Environment {index}", _environment_blocks(project, env))
        for index, env in enumerate(project.environments, start=1)
    ]


def _production_pages(project: Project) -> List[tuple]:
    production = project.production
    blocks = [_heading("Technical Schedule")]
    if production.timeline:
        blocks.append(Block(BlockKind.TABLE, {
            "columns": ["task", "start", "end", "responsible", "status"],
            "rows": [
                [t.task, t.start, t.end, t.responsible, t.status.value]
                for t in production.timeline
            ],
        }))
    else:
        blocks.append(_text("timeline", "No timeline items"))
    blocks.append(_list("checklist", [
        {"label": item.label, "category": item.category, "completed": item.completed}
        for item in production.checklist
    ]))
    return [("Production", blocks)]


_SECTION_BUILDERS = {
    DossierSection.COVER: _cover_pages,
    DossierSection.CONCEPT: _concept_pages,
    DossierSection.MOODBOARD: _moodboard_pages,
    DossierSection.CREST: _crest_pages,
    DossierSection.ENVIRONMENTS: _environment_pages,
    DossierSection.PRODUCTION: _production_pages,
}


def assemble_dossier(
    project: Project,
    sections: Optional[Iterable[DossierSection]] = None,
) -> List[Page]:
    """
    Build the ordered page sequence for a project.

    Args:
        project: Project to project into pages
        sections: Enabled sections (all when None). Output order is
            always the canonical section order.

    Returns:
        Pages numbered consecutively from 1
    """
    enabled = set(ALL_SECTIONS if sections is None else (DossierSection(s) for s in sections))

    pages: List[Page] = []
    for section in ALL_SECTIONS:
        if section not in enabled:
            continue
        for title, blocks in _SECTION_BUILDERS[section](project):
            pages.append(Page(number=len(pages) + 1, section=section, title=title, blocks=blocks))
    return pages
