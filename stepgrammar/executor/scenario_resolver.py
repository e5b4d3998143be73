"""Resolves every step of a feature set to a structured intent"""
import concurrent.futures
from typing import List, Dict, Any

from stepgrammar.parser.feature_parser import Feature, Scenario, Step
from stepgrammar.parser.step_grammar import ParseResult, StepGrammar
from stepgrammar.utils.logger import setup_logger

logger = setup_logger(__name__)


class ScenarioResolver:
    """Runs each scenario's steps through the step grammar"""

    def __init__(self, grammar: StepGrammar, parallel: int = 1):
        self.grammar = grammar
        self.parallel = max(1, parallel)

    def resolve_features(self, features: List[Feature]) -> List[Dict[str, Any]]:
        """Resolve all scenarios, one summary per scenario in file order"""
        all_scenarios = [(feature, scenario) for feature in features for scenario in feature.scenarios]

        if self.parallel > 1:
            # The registry is read-only, so workers share one grammar
            with concurrent.futures.ThreadPoolExecutor(max_workers=self.parallel) as executor:
                futures = [executor.submit(self.resolve_scenario, feature, scenario)
                           for feature, scenario in all_scenarios]
                results = [future.result() for future in futures]
        else:
            results = [self.resolve_scenario(feature, scenario) for feature, scenario in all_scenarios]

        unresolved = sum(1 for result in results if result['status'] != 'resolved')
        logger.info(f"Resolved {len(results) - unresolved}/{len(results)} scenarios")
        return results

    def resolve_scenario(self, feature: Feature, scenario: Scenario) -> Dict[str, Any]:
        """Resolve a single scenario, background steps included"""
        logger.debug(f"Resolving scenario: {scenario.name}")

        background = feature.background.steps if feature.background else []
        scenario_result: Dict[str, Any] = {
            'feature': feature.name,
            'scenario': scenario.name,
            'file': feature.file_path,
            'status': 'resolved',
            'steps': [],
            'unmatched': [],
        }

        for steps in scenario.expanded_steps():
            for step in list(background) + steps:
                result = self.grammar.parse(step.text)
                scenario_result['steps'].append(self._step_summary(step, result))
                if not result.matched:
                    scenario_result['status'] = 'unresolved'
                    scenario_result['unmatched'].append({
                        'line': step.line_number,
                        'text': step.text,
                        'status': result.status.value,
                        'error': result.error,
                    })

        for entry in scenario_result['unmatched']:
            logger.warning(f"{feature.file_path}:{entry['line']} unmatched step: {entry['text']}")

        return scenario_result

    @staticmethod
    def _step_summary(step: Step, result: ParseResult) -> Dict[str, Any]:
        summary: Dict[str, Any] = {
            'keyword': step.keyword.value,
            'text': step.text,
            'line': step.line_number,
            'status': result.status.value,
        }
        if result.step is not None:
            summary['intent'] = result.step.to_dict()
            summary['confidence'] = result.step.confidence
        if step.data_table:
            summary['dataTable'] = step.data_table
        return summary
