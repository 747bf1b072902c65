"""
Invariant-preserving edits over the Project value.

Every function here is pure: it takes a Project, returns a new Project
reflecting one semantic edit, and never touches the input. These are
the only sanctioned way to change nested project state. An edit that
targets a missing entity raises the matching EntityNotFound subclass;
an edit that would break identity uniqueness or approval resolvability
raises an InvariantViolation. In both cases no new value is produced.

Back-references (before_asset_id, base_asset_id, reference and
furniture asset ids) are lookups. Removing an asset does not clean
them up; readers must treat them as possibly dangling.
"""

from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from pydantic import ValidationError

from eventarchitect.domain.constants import MAX_REFERENCE_ASSETS
from eventarchitect.domain.exceptions import (
    AnalysisAlreadyAttached,
    AssetNotFound,
    BoardNotFound,
    CrestNotFound,
    CrestOptionNotFound,
    DuplicateIdentity,
    EnvironmentNotFound,
    InvalidEdit,
    MoodboardNotFound,
    VariationNotFound,
)
from eventarchitect.domain.models import (
    Asset,
    AssetAnalysis,
    AssetType,
    Board,
    BoardVersion,
    Crest,
    CrestOption,
    Directives,
    EntityModel,
    Environment,
    Moodboard,
    Project,
    ProjectStatus,
)


M = TypeVar("M", bound=EntityModel)

# Fields callers may change through the generic field-edit functions.
# Owned collections and identities have dedicated edits.
PROJECT_EDITABLE_FIELDS = frozenset((
    "name", "date", "location", "type", "guest_count", "budget_range",
    "style_tags", "keywords", "restrictions",
))

ENVIRONMENT_EDITABLE_FIELDS = frozenset((
    "name", "goal", "priority", "before_asset_id",
    "reference_asset_ids", "furniture_asset_ids",
))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _ensure_unique(collection: str, existing: Iterable[EntityModel], new_ids: Iterable[str]) -> None:
    seen = {item.id for item in existing}
    for entity_id in new_ids:
        if entity_id in seen:
            raise DuplicateIdentity(collection, entity_id)
        seen.add(entity_id)


def _replace_by_id(items: Sequence[M], replacement: M) -> Tuple[M, ...]:
    return tuple(replacement if item.id == replacement.id else item for item in items)


def _revalidate(model: M, fields: dict, allowed: frozenset) -> M:
    """Apply field changes through full validation so API input is coerced."""
    unknown = set(fields) - allowed
    if unknown:
        raise InvalidEdit(f"Fields cannot be edited: {', '.join(sorted(unknown))}")
    data = model.model_dump()
    data.update(fields)
    try:
        return type(model).model_validate(data)
    except ValidationError as e:
        raise InvalidEdit(f"Invalid value: {e.errors()[0].get('msg', str(e))}") from e


def get_environment(project: Project, environment_id: str) -> Environment:
    environment = project.find_environment(environment_id)
    if environment is None:
        raise EnvironmentNotFound(environment_id)
    return environment


def get_board(project: Project, environment_id: str, board_id: str) -> Board:
    board = get_environment(project, environment_id).find_board(board_id)
    if board is None:
        raise BoardNotFound(board_id)
    return board


def get_asset(project: Project, asset_id: str) -> Asset:
    asset = project.find_asset(asset_id)
    if asset is None:
        raise AssetNotFound(asset_id)
    return asset


def get_crest(project: Project) -> Crest:
    if project.crest is None:
        raise CrestNotFound(project.id, f"Project has no crest: {project.id}")
    return project.crest


def _with_environment(
    project: Project,
    environment_id: str,
    edit: Callable[[Environment], Environment],
) -> Project:
    environment = get_environment(project, environment_id)
    return project.model_copy(
        update={"environments": _replace_by_id(project.environments, edit(environment))}
    )


def _with_board(
    project: Project,
    environment_id: str,
    board_id: str,
    edit: Callable[[Board], Board],
) -> Project:
    board = get_board(project, environment_id, board_id)
    updated = edit(board)
    return _with_environment(
        project,
        environment_id,
        lambda env: env.model_copy(update={"boards": _replace_by_id(env.boards, updated)}),
    )


# ---------------------------------------------------------------------------
# Project fields and lifecycle
# ---------------------------------------------------------------------------

def update_project_fields(project: Project, **fields) -> Project:
    """Change scalar/list project fields (name, date, guest_count, ...)."""
    return _revalidate(project, fields, PROJECT_EDITABLE_FIELDS)


def set_status(project: Project, status: ProjectStatus) -> Project:
    return project.model_copy(update={"status": ProjectStatus(status)})


def set_briefing(
    project: Project,
    transcript: Optional[str],
    directives: Optional[Directives],
) -> Project:
    return project.model_copy(
        update={"briefing_transcript": transcript, "briefing_directives": directives}
    )


# ---------------------------------------------------------------------------
# Environments
# ---------------------------------------------------------------------------

def add_environment(project: Project, environment: Environment) -> Project:
    _ensure_unique("environments", project.environments, [environment.id])
    _ensure_unique("boards", [], [board.id for board in environment.boards])
    return project.model_copy(update={"environments": project.environments + (environment,)})


def remove_environment(project: Project, environment_id: str) -> Project:
    get_environment(project, environment_id)
    remaining = tuple(e for e in project.environments if e.id != environment_id)
    return project.model_copy(update={"environments": remaining})


def update_environment_fields(project: Project, environment_id: str, **fields) -> Project:
    return _with_environment(
        project,
        environment_id,
        lambda env: _revalidate(env, fields, ENVIRONMENT_EDITABLE_FIELDS),
    )


def attach_asset_to_environment(project: Project, environment_id: str, asset_id: str) -> Project:
    """
    Reference an existing asset from an environment slot.

    A space photo becomes the before photo. Furniture is appended.
    References are appended and capped, keeping the earliest ones.
    """
    asset = get_asset(project, asset_id)

    def edit(env: Environment) -> Environment:
        if asset.type == AssetType.SPACE_PHOTO:
            return env.model_copy(update={"before_asset_id": asset.id})
        if asset.type == AssetType.FURNITURE:
            if asset.id in env.furniture_asset_ids:
                return env
            return env.model_copy(update={"furniture_asset_ids": env.furniture_asset_ids + (asset.id,)})
        if asset.type == AssetType.REFERENCE:
            if asset.id in env.reference_asset_ids:
                return env
            refs = (env.reference_asset_ids + (asset.id,))[:MAX_REFERENCE_ASSETS]
            return env.model_copy(update={"reference_asset_ids": refs})
        raise InvalidEdit(f"Asset type {asset.type.value} cannot be attached to an environment")

    return _with_environment(project, environment_id, edit)


def detach_asset_from_environment(project: Project, environment_id: str, asset_id: str) -> Project:
    """Drop an asset reference from an environment. The asset itself stays."""

    def edit(env: Environment) -> Environment:
        return env.model_copy(update={
            "before_asset_id": None if env.before_asset_id == asset_id else env.before_asset_id,
            "reference_asset_ids": tuple(i for i in env.reference_asset_ids if i != asset_id),
            "furniture_asset_ids": tuple(i for i in env.furniture_asset_ids if i != asset_id),
        })

    return _with_environment(project, environment_id, edit)


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------

def add_asset(project: Project, asset: Asset) -> Project:
    _ensure_unique("assets", project.assets, [asset.id])
    return project.model_copy(update={"assets": project.assets + (asset,)})


def remove_asset(project: Project, asset_id: str) -> Project:
    """Delete an asset. References to it elsewhere are left dangling."""
    get_asset(project, asset_id)
    return project.model_copy(
        update={"assets": tuple(a for a in project.assets if a.id != asset_id)}
    )


def attach_analysis_to_asset(
    project: Project,
    asset_id: str,
    analysis: AssetAnalysis,
    tags: Optional[Sequence[str]] = None,
) -> Project:
    """
    Attach the result of the single analysis pass.

    Tags default to the detected styles. Raises AssetNotFound when the
    asset was deleted while the analysis was in flight.
    """
    asset = get_asset(project, asset_id)
    if asset.analysis is not None:
        raise AnalysisAlreadyAttached(asset_id)
    new_tags = tuple(tags) if tags is not None else tuple(analysis.detected_style)
    updated = asset.model_copy(update={"analysis": analysis, "tags": new_tags})
    return project.model_copy(update={"assets": _replace_by_id(project.assets, updated)})


# ---------------------------------------------------------------------------
# Boards
# ---------------------------------------------------------------------------

def new_board(project: Project, environment_id: str, base_asset_id: Optional[str] = None) -> Board:
    """
    Build (but do not add) a board with default directives.

    The base photo defaults to the environment's before photo.
    """
    environment = get_environment(project, environment_id)
    if base_asset_id is not None:
        get_asset(project, base_asset_id)
    return Board.create(
        environment_id=environment_id,
        base_asset_id=base_asset_id or environment.before_asset_id,
        directives=Directives(budget_target=project.budget_range),
    )


def add_board(project: Project, environment_id: str, board: Board) -> Project:
    if board.environment_id != environment_id:
        raise InvalidEdit(f"Board {board.id} belongs to environment {board.environment_id}")
    if board.approved_variation_id and board.find_variation(board.approved_variation_id) is None:
        raise VariationNotFound(board.approved_variation_id)
    environment = get_environment(project, environment_id)
    _ensure_unique("boards", environment.boards, [board.id])
    return _with_environment(
        project,
        environment_id,
        lambda env: env.model_copy(update={"boards": env.boards + (board,)}),
    )


def remove_board(project: Project, environment_id: str, board_id: str) -> Project:
    get_board(project, environment_id, board_id)
    return _with_environment(
        project,
        environment_id,
        lambda env: env.model_copy(update={"boards": tuple(b for b in env.boards if b.id != board_id)}),
    )


def update_board_directives(
    project: Project,
    environment_id: str,
    board_id: str,
    directives: Directives,
) -> Project:
    return _with_board(
        project, environment_id, board_id,
        lambda board: board.model_copy(update={"directives": directives}),
    )


def set_fixed_elements(
    project: Project,
    environment_id: str,
    board_id: str,
    elements: Sequence[str],
) -> Project:
    cleaned = tuple(e.strip() for e in elements if e and e.strip())
    return _with_board(
        project, environment_id, board_id,
        lambda board: board.model_copy(update={"fixed_elements": cleaned}),
    )


def append_board_version(
    project: Project,
    environment_id: str,
    board_id: str,
    version: BoardVersion,
) -> Project:
    """
    Append a generated version to a board's history.

    Prior versions are carried over untouched. Raises BoardNotFound if
    the board was removed while the generation ran.
    """
    if not version.variations:
        raise InvalidEdit("A board version needs at least one variation")

    def edit(board: Board) -> Board:
        _ensure_unique("board history", board.history, [version.id])
        _ensure_unique(
            "variations",
            board.iter_variations(),
            [v.id for v in version.variations],
        )
        return board.model_copy(update={"history": board.history + (version,)})

    return _with_board(project, environment_id, board_id, edit)


def approve_variation(
    project: Project,
    environment_id: str,
    board_id: str,
    variation_id: str,
) -> Project:
    """Approve one variation, replacing any previous approval on the board."""

    def edit(board: Board) -> Board:
        if board.find_variation(variation_id) is None:
            raise VariationNotFound(variation_id)
        return board.model_copy(update={"approved_variation_id": variation_id})

    return _with_board(project, environment_id, board_id, edit)


def revoke_variation_approval(project: Project, environment_id: str, board_id: str) -> Project:
    return _with_board(
        project, environment_id, board_id,
        lambda board: board.model_copy(update={"approved_variation_id": None}),
    )


# ---------------------------------------------------------------------------
# Crest
# ---------------------------------------------------------------------------

def set_crest(project: Project, crest: Crest) -> Project:
    """Install a crest, replacing the previous one."""
    _ensure_unique("crest options", [], [o.id for o in crest.options])
    if crest.approved_option_id and crest.find_option(crest.approved_option_id) is None:
        raise CrestOptionNotFound(crest.approved_option_id)
    return project.model_copy(update={"crest": crest})


def add_crest_options(project: Project, options: Sequence[CrestOption]) -> Project:
    crest = get_crest(project)
    _ensure_unique("crest options", crest.options, [o.id for o in options])
    updated = crest.model_copy(update={"options": crest.options + tuple(options)})
    return project.model_copy(update={"crest": updated})


def approve_crest_option(project: Project, option_id: str) -> Project:
    """Approve one crest option, replacing any previous approval."""
    crest = get_crest(project)
    if crest.find_option(option_id) is None:
        raise CrestOptionNotFound(option_id)
    return project.model_copy(
        update={"crest": crest.model_copy(update={"approved_option_id": option_id})}
    )


def revoke_crest_approval(project: Project) -> Project:
    crest = get_crest(project)
    return project.model_copy(
        update={"crest": crest.model_copy(update={"approved_option_id": None})}
    )


# ---------------------------------------------------------------------------
# Moodboards
# ---------------------------------------------------------------------------

def add_moodboard(project: Project, moodboard: Moodboard) -> Project:
    _ensure_unique("moodboards", project.moodboards, [moodboard.id])
    return project.model_copy(update={"moodboards": project.moodboards + (moodboard,)})


def remove_moodboard(project: Project, moodboard_id: str) -> Project:
    if project.find_moodboard(moodboard_id) is None:
        raise MoodboardNotFound(moodboard_id)
    return project.model_copy(
        update={"moodboards": tuple(m for m in project.moodboards if m.id != moodboard_id)}
    )


# ---------------------------------------------------------------------------
# Whole-project checks
# ---------------------------------------------------------------------------

def _duplicates(ids: Iterable[str]) -> List[str]:
    seen, dupes = set(), []
    for entity_id in ids:
        if entity_id in seen:
            dupes.append(entity_id)
        seen.add(entity_id)
    return dupes


def check_invariants(project: Project) -> List[str]:
    """
    Return a list of structural violations (empty when consistent).

    Checks identity uniqueness in every owned collection and that every
    approval resolves. Dangling asset references are not violations.
    """
    problems: List[str] = []

    def dup(collection: str, ids: Iterable[str]) -> None:
        for entity_id in _duplicates(ids):
            problems.append(f"duplicate id in {collection}: {entity_id}")

    dup("environments", (e.id for e in project.environments))
    dup("assets", (a.id for a in project.assets))
    dup("moodboards", (m.id for m in project.moodboards))
    dup("checklist", (i.id for i in project.production.checklist))
    dup("timeline", (i.id for i in project.production.timeline))
    dup("budget", (i.id for i in project.production.budget))

    for env in project.environments:
        dup(f"boards of {env.id}", (b.id for b in env.boards))
        for board in env.boards:
            dup(f"history of {board.id}", (v.id for v in board.history))
            dup(f"variations of {board.id}", (v.id for v in board.iter_variations()))
            if board.approved_variation_id and board.approved_variation is None:
                problems.append(
                    f"board {board.id} approves missing variation {board.approved_variation_id}"
                )

    if project.crest is not None:
        crest = project.crest
        dup("crest options", (o.id for o in crest.options))
        if crest.approved_option_id and crest.approved_option is None:
            problems.append(f"crest approves missing option {crest.approved_option_id}")

    return problems
