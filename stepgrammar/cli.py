"""
stepgrammar command line
Parse single steps, list the rule tables, self-check every rule example and
resolve whole feature directories.
"""

import json
import sys
from typing import List, Tuple

import click

from stepgrammar import __version__
from stepgrammar.core.config_manager import ConfigManager
from stepgrammar.core.exceptions import StepGrammarError
from stepgrammar.executor.scenario_resolver import ScenarioResolver
from stepgrammar.parser.feature_parser import FeatureParser
from stepgrammar.parser.quoted_extractor import extract_quoted
from stepgrammar.parser.step_grammar import StepGrammar
from stepgrammar.utils.logger import setup_logger

logger = setup_logger(__name__)


def check_examples(grammar: StepGrammar) -> List[Tuple[str, str, str]]:
    """Every rule example must be matched first by its own rule.

    Returns (rule id, example, winning rule id or 'unmatched') for each failure.
    """
    failures = []
    for rule in grammar.registry:
        for example in rule.examples:
            normalized = extract_quoted(example).normalized
            candidates = grammar.matcher.candidates(normalized)
            winner = candidates[0] if candidates else 'unmatched'
            if winner != rule.id:
                failures.append((rule.id, example, winner))
    return failures


@click.group()
@click.version_option(__version__, prog_name='stepgrammar')
@click.option('--env', '-e', default='dev', help='Environment config to merge (dev/staging/prod)')
@click.option('--config', '-c', default='config/config.yaml', help='Path to config file')
@click.pass_context
def cli(ctx, env, config):
    """stepgrammar - turn English test steps into structured intents

    Examples:
        stepgrammar parse "Click the 'Submit' button"

        stepgrammar rules --domain api

        stepgrammar features features/ --tags @smoke --parallel 4
    """
    ctx.ensure_object(dict)
    try:
        config_data = ConfigManager(config, env).load_config()
        ctx.obj['config'] = config_data
        ctx.obj['grammar'] = StepGrammar(config=config_data)
    except StepGrammarError as e:
        logger.error(str(e))
        sys.exit(1)


@cli.command()
@click.argument('sentence')
@click.pass_context
def parse(ctx, sentence):
    """Parse one step sentence and print its intent as JSON"""
    grammar: StepGrammar = ctx.obj['grammar']
    result = grammar.parse(sentence)

    if not result.matched:
        payload = {'status': result.status.value, 'sentence': result.sentence}
        if result.rule_id:
            payload['ruleId'] = result.rule_id
            payload['error'] = result.error
        click.echo(json.dumps(payload, indent=2))
        sys.exit(1)

    output = result.step.to_dict()
    output['confidence'] = result.step.confidence
    if result.step.target is not None:
        output['target'] = result.step.target.to_dict()
    click.echo(json.dumps(output, indent=2))


@cli.command()
@click.option('--domain', '-d', default=None, help='Only list rules from this domain')
@click.pass_context
def rules(ctx, domain):
    """List rules in priority order"""
    registry = ctx.obj['grammar'].registry
    shown = 0
    for rule in registry:
        rule_domain = registry.domain_of(rule.id)
        if domain and rule_domain != domain:
            continue
        click.echo(f"{rule.priority:>5}  {rule_domain:<11} {rule.id:<34} {rule.intent.value}")
        shown += 1

    if domain and not shown:
        click.echo(f"No rules in domain '{domain}'", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def check(ctx):
    """Check every rule example against the registry"""
    grammar: StepGrammar = ctx.obj['grammar']

    for priority, first, second in grammar.registry.collisions:
        click.echo(f"Priority collision at {priority}: {first} / {second}")

    failures = check_examples(grammar)
    for rule_id, example, winner in failures:
        click.echo(click.style(f"FAIL {rule_id}: '{example}' -> {winner}", fg='red'))

    total = sum(len(rule.examples) for rule in grammar.registry)
    click.echo(f"{total - len(failures)}/{total} examples matched their own rule "
               f"({grammar.rule_count()} rules)")
    if failures:
        sys.exit(1)


@cli.command()
@click.argument('path', type=click.Path(exists=True))
@click.option('--tags', '-t', multiple=True, help='Tags to filter scenarios')
@click.option('--parallel', '-p', default=None, type=int, help='Number of worker threads')
@click.option('--json', 'as_json', is_flag=True, help='Print the full resolution as JSON')
@click.pass_context
def features(ctx, path, tags, parallel, as_json):
    """Resolve every step of the feature files under PATH"""
    grammar: StepGrammar = ctx.obj['grammar']
    if parallel is None:
        parallel = ctx.obj['config'].get('runner', {}).get('parallel', 1)

    parsed = FeatureParser(path).parse_features(list(tags))
    if not parsed:
        click.echo("No scenarios found matching the criteria")
        return

    results = ScenarioResolver(grammar, parallel=parallel).resolve_features(parsed)

    if as_json:
        click.echo(json.dumps(results, indent=2))
    else:
        for result in results:
            colour = 'green' if result['status'] == 'resolved' else 'red'
            click.echo(click.style(f"[{result['status']}] {result['feature']} :: {result['scenario']}",
                                   fg=colour))
            for entry in result['unmatched']:
                click.echo(f"    line {entry['line']}: {entry['text']}")

    unresolved = [result for result in results if result['status'] != 'resolved']
    click.echo(f"{len(results) - len(unresolved)}/{len(results)} scenarios fully resolved")
    if unresolved:
        sys.exit(1)


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
