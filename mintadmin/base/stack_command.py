"""
Stack Command Base Class

Base class for commands that talk to the admin stack.
Provides config loading and deployer / policy attacher construction.
"""

from pathlib import Path
from typing import Optional, Dict, Any

from .base_command import BaseCommand
from mintadmin.aws.clients import AWSClients
from mintadmin.core.config_loader import AdminConfig, ConfigLoader
from mintadmin.core.template import load_template
from mintadmin.services.deployer import StackDeployer
from mintadmin.services.policy_attacher import PolicyAttacher


class StackCommand(BaseCommand):
    """
    Base class for admin stack commands.

    Provides:
    - Layered config loading (file, env, CLI flags)
    - AWS client construction from the resolved region/profile
    - A StackDeployer and a PolicyAttacher wired to the logger
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
        verbose: bool = False,
        json_output: bool = False,
    ):
        super().__init__(verbose=verbose, json_output=json_output)
        self.config_path = config_path
        self.overrides = overrides or {}
        self.config: Optional[AdminConfig] = None
        self.clients: Optional[AWSClients] = None

    def load_config(self) -> AdminConfig:
        """Resolve configuration once per command."""
        if self.config is None:
            self.config = ConfigLoader().load(self.config_path, self.overrides)
        return self.config

    def ensure_clients(self) -> AWSClients:
        """Build boto3 clients for the configured region and profile."""
        if self.clients is None:
            config = self.load_config()
            self.clients = AWSClients.from_session(config.region, config.profile)
        return self.clients

    def build_deployer(self) -> StackDeployer:
        """Create a deployer for the configured account and region."""
        config = self.load_config()
        return StackDeployer.from_clients(
            self.ensure_clients(),
            load_template(),
            poll_interval=config.poll_interval,
            logger=self.logger,
        )

    def build_attacher(self) -> PolicyAttacher:
        """Create a permission set policy attacher for the configured account."""
        return PolicyAttacher.from_clients(self.ensure_clients(), logger=self.logger)
