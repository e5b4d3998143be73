"""
Feature parser
Parses Gherkin feature files into features, scenarios and steps
"""

from pathlib import Path
from typing import List, Dict, Optional
from dataclasses import dataclass, field
from enum import Enum

from stepgrammar.utils.helpers import interpolate_string
from stepgrammar.utils.logger import setup_logger

logger = setup_logger(__name__)

STEP_KEYWORDS = ('Given ', 'When ', 'Then ', 'And ', 'But ')


class StepType(Enum):
    GIVEN = "given"
    WHEN = "when"
    THEN = "then"
    AND = "and"
    BUT = "but"


@dataclass
class Step:
    keyword: StepType
    text: str
    line_number: int
    data_table: Optional[List[List[str]]] = None


@dataclass
class Scenario:
    name: str
    description: str
    steps: List[Step]
    tags: List[str]
    examples: Optional[Dict] = None
    line_number: int = 0
    outline: bool = False

    def expanded_steps(self) -> List[List[Step]]:
        """One step list per Examples row, with <placeholders> substituted.

        A plain scenario, or an outline without example rows, gives a single
        list holding its own steps.
        """
        rows = (self.examples or {}).get('rows') or []
        if not self.outline or not rows:
            return [list(self.steps)]

        return [
            [Step(keyword=step.keyword, text=interpolate_string(step.text, row),
                  line_number=step.line_number, data_table=step.data_table)
             for step in self.steps]
            for row in rows
        ]


@dataclass
class Feature:
    name: str
    description: str
    scenarios: List[Scenario]
    tags: List[str]
    background: Optional[Scenario] = None
    file_path: str = ""


@dataclass
class _ParseState:
    feature: Optional[Feature] = None
    background: Optional[Scenario] = None
    scenario: Optional[Scenario] = None
    step: Optional[Step] = None
    tags: List[str] = field(default_factory=list)
    in_examples: bool = False
    examples_data: List[List[str]] = field(default_factory=list)


class FeatureParser:
    """Parse Gherkin feature files"""

    def __init__(self, features_dir: str):
        self.features_dir = Path(features_dir)

    def feature_files(self) -> List[Path]:
        if self.features_dir.is_file():
            return [self.features_dir]
        return sorted(self.features_dir.glob("**/*.feature"))

    def parse_features(self, tags: List[str] = None) -> List[Feature]:
        """Parse all feature files in directory"""
        features = []

        feature_files = self.feature_files()
        if not feature_files:
            logger.warning(f"No feature files found in {self.features_dir}")

        for feature_file in feature_files:
            feature = self.parse_file(feature_file)
            if feature:
                # Filter by tags if provided
                if tags:
                    filtered_scenarios = [scenario for scenario in feature.scenarios
                                          if any(tag in scenario.tags for tag in tags)]
                    if filtered_scenarios:
                        feature.scenarios = filtered_scenarios
                        features.append(feature)
                else:
                    features.append(feature)

        logger.info(f"Parsed {len(features)} features from {self.features_dir}")
        return features

    def parse_file(self, file_path: Path) -> Optional[Feature]:
        """Parse a single feature file, None when it cannot be read or has no Feature line"""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                lines = f.readlines()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading feature file {file_path}: {e}")
            return None

        feature = self.parse_lines(lines, str(file_path))
        if feature is None:
            logger.warning(f"No 'Feature:' line in {file_path}")
        return feature

    def parse_lines(self, lines: List[str], file_path: str = "") -> Optional[Feature]:
        state = _ParseState()

        for line_num, line in enumerate(lines, 1):
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith('#'):
                continue

            if line.startswith('@'):
                state.tags = [tag.strip() for tag in line.split() if tag.startswith('@')]

            elif line.startswith('Feature:'):
                state.feature = Feature(
                    name=line[8:].strip(),
                    description="",
                    scenarios=[],
                    tags=list(state.tags),
                    file_path=file_path
                )
                state.tags = []

            elif line.startswith('Background:'):
                self._close_scenario(state)
                state.background = Scenario(name="Background", description="", steps=[], tags=[],
                                            line_number=line_num)
                state.scenario = state.background
                state.step = None

            elif line.startswith(('Scenario:', 'Scenario Outline:', 'Scenario Template:')):
                self._close_scenario(state)

                # Feature tags are inherited after the scenario's own
                scenario_tags = list(state.tags)
                if state.feature:
                    scenario_tags.extend(tag for tag in state.feature.tags if tag not in scenario_tags)

                state.scenario = Scenario(
                    name=line.split(':', 1)[1].strip(),
                    description="",
                    steps=[],
                    tags=scenario_tags,
                    line_number=line_num,
                    outline=not line.startswith('Scenario:')
                )
                state.step = None
                state.tags = []

            elif line.startswith(('Examples:', 'Scenarios:')):
                state.in_examples = True
                state.step = None

            elif state.in_examples and line.startswith('|'):
                state.examples_data.append(self._table_row(line))

            elif line.startswith(STEP_KEYWORDS):
                keyword, _, step_text = line.partition(' ')
                step = Step(
                    keyword=StepType(keyword.lower()),
                    text=step_text.strip(),
                    line_number=line_num
                )
                if state.scenario:
                    state.scenario.steps.append(step)
                else:
                    logger.warning(f"{file_path}:{line_num} step outside a scenario ignored")
                state.step = step

            elif line.startswith('|') and state.step:
                if state.step.data_table is None:
                    state.step.data_table = []
                state.step.data_table.append(self._table_row(line))

            else:
                self._append_description(state, line)

        self._close_scenario(state)

        if state.feature and state.background:
            state.feature.background = state.background

        return state.feature

    def _close_scenario(self, state: _ParseState) -> None:
        scenario = state.scenario
        if scenario is not None and scenario is not state.background:
            if state.examples_data:
                scenario.examples = self._process_examples(state.examples_data)
            if state.feature is not None:
                state.feature.scenarios.append(scenario)
            else:
                logger.warning(f"Scenario '{scenario.name}' appears before any 'Feature:' line")

        state.scenario = None
        state.in_examples = False
        state.examples_data = []

    def _append_description(self, state: _ParseState, line: str) -> None:
        owner = state.scenario if state.scenario and not state.scenario.steps else None
        if owner is None and state.feature and not state.feature.scenarios and state.background is None:
            owner = state.feature
        if owner is not None:
            owner.description = f"{owner.description}\n{line}".strip()

    @staticmethod
    def _table_row(line: str) -> List[str]:
        return [cell.strip() for cell in line.split('|')[1:-1]]

    def _process_examples(self, examples_data: List[List[str]]) -> Dict:
        """Process examples table into dictionary"""
        if not examples_data or len(examples_data) < 2:
            return {}

        headers = examples_data[0]
        examples = {'headers': headers, 'rows': []}

        for row in examples_data[1:]:
            if len(row) == len(headers):
                examples['rows'].append(dict(zip(headers, row)))
            else:
                logger.warning(f"Examples row {row} does not match headers {headers}")

        return examples
