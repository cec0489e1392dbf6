"""Building agent cards and deriving the externally visible version."""

from collections.abc import Callable, Iterable

from a2a.types import AgentCapabilities, AgentCard, AgentSkill

from swarmgate.protocol.wire import JSONRPC_PATH

SkillFilter = Callable[[AgentSkill], bool]


def build_internal_card(
    name: str,
    description: str,
    url: str,
    version: str = "0.1.0",
    skills: Iterable[AgentSkill] = (),
) -> AgentCard:
    """Assemble the full card for an agent, carrying its true service URL."""
    return AgentCard(
        name=name,
        description=description,
        url=url,
        version=version,
        capabilities=AgentCapabilities(
            streaming=False,
            push_notifications=False,
            state_transition_history=True,
        ),
        default_input_modes=["text/plain"],
        default_output_modes=["text/plain"],
        skills=[skill.model_copy(deep=True) for skill in skills],
    )


def filter_to_external_card(
    internal_card: AgentCard,
    base_url: str,
    skill_filter: SkillFilter | None = None,
) -> AgentCard:
    """Derive the card shown to external callers.

    The URL is rewritten to ``{base_url}/jsonrpc`` and skills are narrowed by
    ``skill_filter`` in their original order. The result is a deep copy: the
    internal card and its skill list are never modified.
    """
    keep = skill_filter or (lambda _skill: True)
    return internal_card.model_copy(
        deep=True,
        update={
            "url": f"{base_url.rstrip('/')}/{JSONRPC_PATH}",
            "skills": [
                skill.model_copy(deep=True)
                for skill in internal_card.skills
                if keep(skill)
            ],
        },
    )


def exclude_tags(tags: Iterable[str]) -> SkillFilter:
    """Skill filter rejecting every skill carrying one of ``tags``."""
    excluded = frozenset(tags)

    def _filter(skill: AgentSkill) -> bool:
        return excluded.isdisjoint(skill.tags)

    return _filter
