import click
from flask import current_app
from flask.cli import with_appcontext
import logging

from app.projects.calculator.core.evaluator import CalculationError, evaluate, format_result
from app.projects.calculator.storage import HistoryStore, dump_history, parse_history
from app.projects.calculator.models import CalculatorProfile

logger = logging.getLogger(__name__)

@click.group(name='calculator')
def calculator_cli():
    """Calculator project commands."""
    pass

@calculator_cli.command('evaluate')
@click.argument('expression')
def evaluate_command(expression):
    """Evaluate EXPRESSION the way the calculator display does."""
    try:
        click.echo(format_result(evaluate(expression)))
    except CalculationError as e:
        logger.info(f"Could not evaluate {expression!r}: {e}")
        click.echo("Error")

@calculator_cli.command('clear-history')
@click.option('--client', default=None, help='Client id to clear (default: all clients)')
@with_appcontext
def clear_history_command(client):
    """Clear saved calculator history."""
    if client:
        clients = [client]
    else:
        clients = [p.client_id for p in CalculatorProfile.query.all()]

    if not clients:
        click.echo("No calculator profiles found.")
        return

    for client_id in clients:
        HistoryStore(client_id).save([])
    click.echo(f"Cleared history for {len(clients)} client(s).")

@calculator_cli.command('prune-history')
@with_appcontext
def prune_history_command():
    """Re-apply the history limit to every saved profile."""
    from app import db

    limit = current_app.config.get('CALCULATOR_HISTORY_LIMIT', 200)
    pruned = 0
    for profile in CalculatorProfile.query.all():
        try:
            entries = parse_history(profile.history_json, limit=None)
        except ValueError:
            click.echo(f"  - {profile.client_id}: corrupt history reset")
            profile.history_json = '[]'
            pruned += 1
            continue
        if len(entries) > limit:
            profile.history_json = dump_history(entries, limit)
            pruned += 1
    db.session.commit()
    click.echo(f"Prune complete! {pruned} profile(s) updated.")
