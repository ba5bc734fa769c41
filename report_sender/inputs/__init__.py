"""Input resolution.

Public API:
    resolve_run_config(inputs, env, manifest_dir) -> RunConfig
    Provenance.from_environment(env) -> Provenance
"""

from report_sender.inputs.resolver import resolve_run_config
from report_sender.inputs.types import Provenance, RunConfig

__all__ = ["Provenance", "RunConfig", "resolve_run_config"]
