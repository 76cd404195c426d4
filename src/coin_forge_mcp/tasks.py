"""Generation task declarations and the validated task DAG.

A ``GenerationTask`` pairs a prompt template with the input builder that
pulls what it needs from ``ProjectParameters`` and from upstream outputs.
``TaskGraph`` checks the declarations form a DAG; ``build_task_graph()``
returns the standard launch-kit graph.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass

from pydantic import BaseModel

from .backend import GenerationBackend
from .errors import ErrorCategory, GenerationFailure
from .models import artifacts as a
from .models.params import ProjectParameters

InputBuilder = Callable[[ProjectParameters, Mapping[str, BaseModel]], BaseModel]


@dataclass(frozen=True)
class GenerationTask:
    """One AI-backed generation step.

    Attributes:
        name: Unique task id, also the prompt-template id by default.
        label: Human-readable step name shown in progress lists.
        output: Pydantic schema the backend must return.
        build_input: ``(params, upstream_outputs) -> input model``.
        depends_on: Names of tasks whose outputs this task consumes.
        template: Prompt-template id; defaults to ``name``.
    """

    name: str
    label: str
    output: type[BaseModel]
    build_input: InputBuilder
    depends_on: tuple[str, ...] = ()
    template: str = ""

    @property
    def output_fields(self) -> tuple[str, ...]:
        return tuple(self.output.model_fields)

    async def invoke(
        self,
        backend: GenerationBackend,
        params: ProjectParameters,
        upstream: Mapping[str, BaseModel],
    ) -> BaseModel:
        """Build this task's input and run it through *backend*."""
        template = self.template or self.name
        inputs = self.build_input(params, upstream)
        result = await backend.invoke(template, inputs, self.output)
        if not isinstance(result, self.output):
            raise GenerationFailure(
                template,
                f"backend returned {type(result).__name__}, expected {self.output.__name__}",
                category=ErrorCategory.SCHEMA_VALIDATION_FAILED,
            )
        return result


class TaskGraph:
    """An immutable, validated DAG of generation tasks.

    Raises:
        ValueError: Duplicate names, unknown dependencies, or a cycle.
    """

    def __init__(self, tasks: Sequence[GenerationTask]) -> None:
        self._tasks: dict[str, GenerationTask] = {}
        for task in tasks:
            if task.name in self._tasks:
                raise ValueError(f"Duplicate task name: {task.name!r}")
            self._tasks[task.name] = task

        self._dependents: dict[str, list[str]] = {name: [] for name in self._tasks}
        for task in self._tasks.values():
            for dep in task.depends_on:
                if dep not in self._tasks:
                    raise ValueError(f"Task {task.name!r} depends on unknown task {dep!r}")
                self._dependents[dep].append(task.name)

        self._check_acyclic()

    def _check_acyclic(self) -> None:
        """Kahn's algorithm: every task must be reachable from the roots."""
        remaining = {name: len(task.depends_on) for name, task in self._tasks.items()}
        ready = [name for name, count in remaining.items() if count == 0]
        visited = 0
        while ready:
            name = ready.pop()
            visited += 1
            for child in self._dependents[name]:
                remaining[child] -= 1
                if remaining[child] == 0:
                    ready.append(child)
        if visited != len(self._tasks):
            stuck = sorted(name for name, count in remaining.items() if count > 0)
            raise ValueError(f"Task graph has a cycle involving: {', '.join(stuck)}")

    def __iter__(self) -> Iterator[GenerationTask]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    @property
    def names(self) -> list[str]:
        return list(self._tasks)

    def get(self, name: str) -> GenerationTask:
        return self._tasks[name]

    def roots(self) -> list[GenerationTask]:
        """Tasks with no dependencies, in declaration order."""
        return [task for task in self._tasks.values() if not task.depends_on]

    def dependents(self, name: str) -> list[GenerationTask]:
        """Tasks that directly consume *name*'s output."""
        return [self._tasks[child] for child in self._dependents[name]]

    def describe(self) -> list[dict]:
        """Serialisable view of the graph for clients rendering a checklist."""
        return [
            {
                "name": task.name,
                "label": task.label,
                "depends_on": list(task.depends_on),
                "output_fields": list(task.output_fields),
            }
            for task in self._tasks.values()
        ]


# ── Standard launch-kit graph ────────────────────────────────────────────────


def _pitch_deck(p: ProjectParameters, _: Mapping[str, BaseModel]) -> BaseModel:
    return a.PitchDeckInput(
        project_name=p.coin_name,
        mission_statement=p.mission_statement,
        target_audience=p.target_audience,
        token_utility=p.token_utility,
        initial_distribution=p.initial_distribution,
    )


def _tokenomics(p: ProjectParameters, _: Mapping[str, BaseModel]) -> BaseModel:
    return a.TokenomicsInput(
        project_name=p.coin_name,
        ticker=p.coin_abbreviation,
        token_utility=p.token_utility,
        initial_distribution=p.initial_distribution,
        coin_supply=p.coin_supply,
    )


def _community(p: ProjectParameters, _: Mapping[str, BaseModel]) -> BaseModel:
    return a.CommunityInput(
        project_name=p.coin_name,
        mission_statement=p.mission_statement,
        target_audience=p.target_audience,
        brand_voice=p.brand_voice,
        community_plan=p.community_plan or "(none given)",
    )


def _logo(p: ProjectParameters, _: Mapping[str, BaseModel]) -> BaseModel:
    return a.LogoInput(
        coin_name=p.coin_name,
        logo_description=p.logo_description or "a bold geometric emblem",
    )


def _whitepaper_fields(p: ProjectParameters) -> dict:
    return {
        "coin_name": p.coin_name,
        "coin_abbreviation": p.coin_abbreviation,
        "problem_statement": p.problem_statement,
        "solution_statement": p.solution_statement,
        "key_features": p.key_features,
        "consensus_mechanism": p.consensus_mechanism,
        "tokenomics": p.tokenomics_summary,
    }


def _whitepaper(p: ProjectParameters, _: Mapping[str, BaseModel]) -> BaseModel:
    return a.WhitepaperInput(**_whitepaper_fields(p))


def _landing_page(p: ProjectParameters, _: Mapping[str, BaseModel]) -> BaseModel:
    return a.LandingPageInput(
        **_whitepaper_fields(p),
        tagline=p.tagline,
        website_url=p.website_url or "",
        github_url=p.github_url or "",
    )


def _social_campaign(p: ProjectParameters, _: Mapping[str, BaseModel]) -> BaseModel:
    return a.SocialCampaignInput(
        coin_name=p.coin_name,
        coin_abbreviation=p.coin_abbreviation,
        problem_statement=p.problem_statement,
        solution_statement=p.solution_statement,
        key_features=p.key_features,
        website_url=p.website_url or "(not yet live)",
    )


def _genesis_block(p: ProjectParameters, _: Mapping[str, BaseModel]) -> BaseModel:
    return a.GenesisBlockInput(
        coin_name=p.coin_name,
        coin_abbreviation=p.coin_abbreviation,
        address_letter=p.address_letter,
        coin_unit=p.coin_unit,
        timestamp=p.timestamp or f"{p.coin_name} genesis",
        block_reward=p.block_reward,
        block_halving=p.block_halving,
        coin_supply=p.coin_supply,
        consensus_mechanism=p.consensus_mechanism,
    )


def _network_config(p: ProjectParameters, _: Mapping[str, BaseModel]) -> BaseModel:
    return a.NetworkConfigInput(
        coin_name=p.coin_name,
        ticker=p.coin_abbreviation,
        address_letter=p.address_letter,
        coin_unit=p.coin_unit,
        block_reward=p.block_reward,
        block_halving=p.block_halving,
        coin_supply=p.coin_supply,
        coinbase_maturity=p.coinbase_maturity,
        number_of_confirmations=p.number_of_confirmations,
        target_spacing_in_minutes=p.target_spacing_in_minutes,
        target_timespan_in_minutes=p.target_timespan_in_minutes,
    )


def _compilation(p: ProjectParameters, _: Mapping[str, BaseModel]) -> BaseModel:
    return a.CompilationInput(
        coin_name=p.coin_name,
        consensus_mechanism=p.consensus_mechanism,
        target_spacing=p.target_spacing_in_minutes,
    )


def _readme(p: ProjectParameters, _: Mapping[str, BaseModel]) -> BaseModel:
    return a.ReadmeInput(
        project_name=p.coin_name,
        ticker=p.coin_abbreviation,
        mission_statement=p.mission_statement,
    )


def _install_script(p: ProjectParameters, _: Mapping[str, BaseModel]) -> BaseModel:
    return a.InstallScriptInput(project_name=p.coin_name, ticker=p.coin_abbreviation)


def _node_setup(p: ProjectParameters, upstream: Mapping[str, BaseModel]) -> BaseModel:
    return a.NodeSetupInput(
        coin_name=p.coin_name,
        coin_symbol=p.coin_abbreviation,
        genesis_block_code=upstream["genesis_block"].genesis_block_code,
        network_parameters=upstream["network_config"].network_configuration_file,
        compilation_instructions=upstream["compilation"].compilation_instructions,
    )


def _audio_summary(p: ProjectParameters, _: Mapping[str, BaseModel]) -> BaseModel:
    return a.AudioSummaryInput(summary=p.technical_summary)


STANDARD_TASKS: tuple[GenerationTask, ...] = (
    GenerationTask("pitch_deck", "Investor Pitch Deck", a.PitchDeckOutput, _pitch_deck),
    GenerationTask("tokenomics", "Tokenomics Model", a.TokenomicsOutput, _tokenomics),
    GenerationTask("community", "Community Strategy", a.CommunityOutput, _community),
    GenerationTask("logo", "Logo Generation", a.LogoOutput, _logo),
    GenerationTask("whitepaper", "Whitepaper", a.WhitepaperOutput, _whitepaper),
    GenerationTask("landing_page", "Landing Page", a.LandingPageOutput, _landing_page),
    GenerationTask("social_campaign", "Social Campaign", a.SocialCampaignOutput, _social_campaign),
    GenerationTask("genesis_block", "Genesis Block", a.GenesisBlockOutput, _genesis_block),
    GenerationTask("network_config", "Network Config", a.NetworkConfigOutput, _network_config),
    GenerationTask("compilation", "Compilation Guidance", a.CompilationOutput, _compilation),
    GenerationTask("readme", "README", a.ReadmeOutput, _readme),
    GenerationTask("install_script", "Install Script", a.InstallScriptOutput, _install_script),
    GenerationTask(
        "node_setup",
        "Node Setup Instructions",
        a.NodeSetupOutput,
        _node_setup,
        depends_on=("genesis_block", "network_config", "compilation"),
    ),
)

AUDIO_SUMMARY_TASK = GenerationTask("audio_summary", "Audio Summary", a.AudioSummaryOutput, _audio_summary)


def build_task_graph(*, include_audio: bool = False) -> TaskGraph:
    """Return the standard launch-kit DAG, optionally with the spoken summary."""
    tasks = list(STANDARD_TASKS)
    if include_audio:
        tasks.append(AUDIO_SUMMARY_TASK)
    return TaskGraph(tasks)
