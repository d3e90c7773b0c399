"""Command-line interface for tasklint."""

from __future__ import annotations

import logging as logging

from tasklint.cli.app import main as main
from tasklint.cli.commands import refs as refs_command
from tasklint.cli.commands import template as template_command
from tasklint.cli.commands import validate as validate_command
from tasklint.cli.parser import build_parser as build_parser
from tasklint.config import Policy as Policy
from tasklint.config import load_policy as load_policy
from tasklint.engine import validate_file as validate_file
from tasklint.parsing import parse_file as parse_file
from tasklint.parsing import reference_stats as reference_stats
from tasklint.rendering import format_result as format_result
from tasklint.templates import render_template as render_template

_run_validate = validate_command.run_validate
_run_template = template_command.run_template
_run_refs = refs_command.run_refs
