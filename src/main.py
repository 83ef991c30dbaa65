"""
AR tracking runtime.

Builds a headless engine, registers the configured tracking providers with its
session, loads the scene and waits for the session to become ready. With
--serve (or web.enabled in config) the control API is served on the same
event loop so clients can start and stop tracking sessions.

Usage:
    python src/main.py --config config/config.yaml --serve

Arguments:
    --config: Path to configuration file
    --serve: Serve the control API
"""

import os
import sys
import argparse
import asyncio
import logging
import yaml
from typing import Dict, Any, Tuple, Optional

import uvicorn

from models.config import Config, PROVIDER_NAMES, SDK_BACKENDS
from ops.logging import setup_logging
from runtime.context import RuntimeContext, build_runtime
from session.errors import ProviderLoadError
from web.app import create_app


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base and return base."""
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration with layering:
    - `config/default.yaml` (checked in)
    - `config/config.yaml` (local overrides)
    - plus any explicitly provided `--config` path (treated as overrides)
    """
    try:
        config_dir = os.path.dirname(config_path)
        base_path = os.path.join(config_dir, "default.yaml")
        base_cfg: Dict[str, Any] = {}
        if os.path.exists(base_path):
            with open(base_path, "r") as f:
                base_cfg = yaml.safe_load(f) or {}

        local_overrides_path = os.path.join(config_dir, "config.yaml")
        local_cfg: Dict[str, Any] = {}
        if os.path.exists(local_overrides_path):
            with open(local_overrides_path, "r") as f:
                local_cfg = yaml.safe_load(f) or {}

        merged = _deep_merge(base_cfg, local_cfg)

        if os.path.exists(config_path) and os.path.abspath(config_path) not in (
            os.path.abspath(local_overrides_path),
            os.path.abspath(base_path),
        ):
            with open(config_path, "r") as f:
                explicit_cfg = yaml.safe_load(f) or {}
            merged = _deep_merge(merged, explicit_cfg)

        return merged
    except Exception as e:
        logging.error(f"Failed to load configuration: {e}")
        sys.exit(1)


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(x, str) for x in value)


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary

    Returns:
        Tuple of (is_valid, error_message)
    """
    required_sections = ['engine', 'providers', 'log_path', 'log_level']
    for section in required_sections:
        if section not in config:
            return False, f"Missing required configuration section: {section}"

    # Engine
    engine = config.get('engine') or {}
    if not isinstance(engine, dict):
        return False, "engine must be a mapping"
    if 'name' in engine and (not isinstance(engine['name'], str) or not engine['name']):
        return False, "engine.name must be a non-empty string"
    if 'ar_supported' in engine and not isinstance(engine['ar_supported'], bool):
        return False, "engine.ar_supported must be true or false"
    if 'supported_features' in engine and not _is_str_list(engine['supported_features']):
        return False, "engine.supported_features must be a list of strings"
    if 'permission_delay_s' in engine:
        delay = engine['permission_delay_s']
        if not isinstance(delay, (int, float)) or isinstance(delay, bool) or delay < 0:
            return False, "engine.permission_delay_s must be a non-negative number"

    # Providers
    providers = config.get('providers') or {}
    if not isinstance(providers, dict):
        return False, "providers must be a mapping"
    enabled = providers.get('enabled', [])
    if not _is_str_list(enabled):
        return False, "providers.enabled must be a list of provider names"
    for name in enabled:
        if name not in PROVIDER_NAMES:
            return False, f"providers.enabled: unknown provider '{name}' (expected one of: {', '.join(PROVIDER_NAMES)})"
    if len(set(enabled)) != len(enabled):
        return False, "providers.enabled must not list a provider twice"

    webxr = providers.get('webxr') or {}
    for key in ('required_features', 'optional_features'):
        if key in webxr and not _is_str_list(webxr[key]):
            return False, f"providers.webxr.{key} must be a list of strings"

    for name in ('xr8', 'zappar'):
        sdk = (providers.get(name) or {}).get('sdk', 'simulated')
        if sdk not in SDK_BACKENDS:
            return False, f"providers.{name}.sdk must be one of: {', '.join(SDK_BACKENDS)}"

    if 'xr8' in enabled:
        token = (providers.get('xr8') or {}).get('api_token')
        if not isinstance(token, str) or not token:
            return False, "providers.xr8.api_token is required when xr8 is enabled"

    # Web
    web = config.get('web') or {}
    if 'enabled' in web and not isinstance(web['enabled'], bool):
        return False, "web.enabled must be true or false"
    if 'host' in web and not isinstance(web['host'], str):
        return False, "web.host must be a string"
    if 'port' in web:
        port = web['port']
        if not isinstance(port, int) or isinstance(port, bool) or not (0 < port < 65536):
            return False, "web.port must be an integer between 1 and 65535"

    # Logging
    if not isinstance(config['log_path'], str) or not config['log_path']:
        return False, "log_path must be a non-empty string"
    valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if config['log_level'] not in valid_log_levels:
        return False, f"log_level must be one of: {', '.join(valid_log_levels)}"

    return True, None


async def _serve(ctx: RuntimeContext) -> None:
    server = uvicorn.Server(
        uvicorn.Config(
            create_app(ctx),
            host=ctx.config.web.host,
            port=ctx.config.web.port,
            log_level="info",
        )
    )
    logging.info(f"Control API listening on {ctx.config.web.host}:{ctx.config.web.port}")
    await server.serve()


async def run(config: Config, serve: bool) -> int:
    ctx = await build_runtime(config)
    try:
        try:
            await ctx.session.wait_until_ready()
        except ProviderLoadError as e:
            logging.error(f"Session can not become ready: {e}")
            return 1

        logging.info(f"Session ready: {ctx.get_status()}")
        if serve:
            await _serve(ctx)
        return 0
    finally:
        await ctx.shutdown()


def main():
    """Main application function."""
    parser = argparse.ArgumentParser(description='AR Tracking Runtime')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--serve', action='store_true',
                        help='Serve the control API')
    args = parser.parse_args()

    config_dict = load_config(args.config)

    is_valid, error_msg = validate_config(config_dict)
    if not is_valid:
        logging.error(f"Configuration validation failed: {error_msg}")
        sys.exit(1)

    setup_logging(config_dict['log_path'], config_dict['log_level'])
    logging.info("Starting AR tracking runtime")

    config = Config.from_dict(config_dict)
    serve = args.serve or config.web.enabled

    try:
        exit_code = asyncio.run(run(config, serve))
    except KeyboardInterrupt:
        logging.info("Shutting down")
        exit_code = 0
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
