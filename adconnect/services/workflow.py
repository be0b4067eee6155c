"""Provisioning workflow that joins the host to an Active Directory domain.

The workflow runs a fixed list of steps. Each step either succeeds, is
skipped at the operator's request, or raises a
:class:`~adconnect.domain.errors.ConnectorError`. The first error is written
to the run log as a single ``ERROR:`` record and no further step runs;
changes already applied to the host are left in place.
"""

from __future__ import annotations

from typing import Callable

from adconnect.app.config import ConnectorSettings
from adconnect.domain.errors import ConnectorError, ExternalCommandFailure
from adconnect.domain.models import (
    AccessChoice,
    AccessPolicy,
    RunConfig,
    RunReport,
    StepResult,
    StepStatus,
)
from adconnect.infrastructure.observability import Reporter, get_logger, log_context
from adconnect.infrastructure.system import commands
from adconnect.infrastructure.system.commands import Command
from adconnect.infrastructure.system.executor import CommandExecutor
from adconnect.infrastructure.system.files import HostFiles, backup_path

from .prompts import Prompter

_logger = get_logger(__name__)

BANNER_RULE = "==============================="
PRODUCT_NAME = "Linux Active Directory Connector"

STEPS: tuple[tuple[str, str], ...] = (
    ("system-update", "Update system packages"),
    ("install-packages", "Install realmd, SSSD and adcli"),
    ("configure-dns", "Point the resolver at the AD DNS server"),
    ("discover-realm", "Discover the realm"),
    ("configure-kerberos", "Write the Kerberos configuration"),
    ("join-domain", "Join the domain"),
    ("verify-join", "Verify the domain join"),
    ("restart-sssd", "Restart the SSSD service"),
    ("fetch-domain-info", "Display domain information"),
    ("enable-mkhomedir", "Enable PAM mkhomedir"),
    ("configure-access", "Configure sudo and login access"),
)

_ACCESS_MESSAGES: dict[AccessChoice, tuple[str, str]] = {
    AccessChoice.ALL_SUDO_AND_LOGIN: (
        "Granting sudo and login access to all domain users...",
        "Sudo and login access granted to all domain users.",
    ),
    AccessChoice.ALL_LOGIN_ONLY: (
        "Granting login access (no sudo) to all domain users...",
        "Login access granted to all domain users.",
    ),
    AccessChoice.GROUP_SUDO: (
        "Granting sudo and login access to group: {group}...",
        "Sudo and login access granted to group: {group}.",
    ),
    AccessChoice.DENY_ALL: (
        "No sudo or login access granted to anyone.",
        "Login access denied for all domain users.",
    ),
}


class ProvisioningWorkflow:
    """Runs the join steps in order against injected collaborators."""

    def __init__(
        self,
        *,
        settings: ConnectorSettings,
        reporter: Reporter,
        executor: CommandExecutor,
        files: HostFiles,
        prompter: Prompter,
    ) -> None:
        self._settings = settings
        self._reporter = reporter
        self._executor = executor
        self._files = files
        self._prompter = prompter
        self._config = RunConfig()

    @property
    def config(self) -> RunConfig:
        return self._config

    def run(self) -> RunReport:
        report = RunReport()
        self._welcome()
        for key, handler in self._plan():
            with log_context(step=key):
                _logger.debug("Starting step")
                try:
                    status = handler()
                except ConnectorError as exc:
                    self._reporter.error(exc.message)
                    report.add(StepResult(key, StepStatus.FAILED, exc.message))
                    report.config = self._config
                    return report
            report.add(StepResult(key, status))
        report.config = self._config
        self._complete()
        report.reboot_requested = self._offer_reboot()
        return report

    def _plan(self) -> list[tuple[str, Callable[[], StepStatus]]]:
        handlers = {
            "system-update": self._system_update,
            "install-packages": self._install_packages,
            "configure-dns": self._configure_dns,
            "discover-realm": self._discover_realm,
            "configure-kerberos": self._configure_kerberos,
            "join-domain": self._join_domain,
            "verify-join": self._verify_join,
            "restart-sssd": self._restart_sssd,
            "fetch-domain-info": self._fetch_domain_info,
            "enable-mkhomedir": self._enable_mkhomedir,
            "configure-access": self._configure_access,
        }
        return [(key, handlers[key]) for key, _ in STEPS]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _record(self, message: str) -> None:
        self._reporter.record(message)

    def _check(self, command: Command, error_message: str) -> None:
        result = self._executor.run(command)
        if not result.ok:
            _logger.debug("%s failed with exit status %d", command, result.returncode)
            raise ExternalCommandFailure(error_message, command, result.returncode)

    def _update(self, **changes: object) -> None:
        self._config = self._config.with_values(**changes)

    @property
    def _domain(self) -> str:
        if self._config.domain is None:
            raise ConnectorError("No domain has been entered yet.")
        return self._config.domain

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _welcome(self) -> None:
        self._record(BANNER_RULE)
        self._record(f"Starting {PRODUCT_NAME}")
        self._record(BANNER_RULE)
        self._reporter.echo(f"Starting {PRODUCT_NAME}... Please follow the instructions.")
        self._record("Script initiated.")

    def _system_update(self) -> StepStatus:
        self._record("Updating system packages...")
        for command in commands.system_update():
            self._check(command, "System update failed.")
        return StepStatus.SUCCEEDED

    def _install_packages(self) -> StepStatus:
        self._record("Installing required packages...")
        self._check(
            commands.apt_install(self._settings.packages),
            "Package installation failed.",
        )
        return StepStatus.SUCCEEDED

    def _configure_dns(self) -> StepStatus:
        if not self._prompter.confirm("Do you need to configure the DNS statically? (y/n)"):
            self._update(configure_dns=False)
            self._record("DNS configuration skipped.")
            return StepStatus.SKIPPED

        address = self._prompter.ask_address("Enter AD DNS server IP")
        self._update(configure_dns=True, dns_server=address)
        self._record(f"Configuring DNS with IP: {address}...")
        self._files.write_resolver(address)

        self._record("Pinging DNS server to test connectivity...")
        self._check(
            commands.ping(address, self._settings.dns_probe_count),
            f"DNS server {address} is not reachable. "
            "Please check the IP and network connectivity.",
        )
        return StepStatus.SUCCEEDED

    def _discover_realm(self) -> StepStatus:
        domain = self._prompter.ask("Enter the domain (e.g., example.com)")
        self._update(domain=domain)
        self._record(f"Discovering the realm: {domain}...")
        self._check(
            commands.realm_discover(domain),
            f"Failed to discover the realm: {domain}.",
        )
        return StepStatus.SUCCEEDED

    def _configure_kerberos(self) -> StepStatus:
        realm = self._prompter.ask("Enter the realm (e.g., EXAMPLE.COM)").strip()
        self._record(f"Configuring Kerberos with realm: {realm}...")
        if not realm:
            raise ConnectorError("Realm is empty. Please provide a valid realm.")
        self._update(realm=realm)

        krb5_conf = self._files.krb5_conf
        if krb5_conf.exists():
            self._record(f"Backing up existing {krb5_conf} to {backup_path(krb5_conf)}")
            self._files.backup(krb5_conf)

        self._record("Writing Kerberos configuration...")
        self._files.write_kerberos(realm)
        self._record(f"Kerberos configuration for realm {realm} completed successfully.")
        return StepStatus.SUCCEEDED

    def _join_domain(self) -> StepStatus:
        admin_user = self._prompter.ask("Enter the admin username for joining the domain")
        organizational_unit = self._prompter.ask(
            "Enter the Organizational Unit (OU) for the computer object"
        )
        self._update(admin_user=admin_user, organizational_unit=organizational_unit)
        self._record(f"Joining domain with admin user {admin_user}...")
        self._check(
            commands.realm_join(admin_user, self._domain, organizational_unit),
            f"Failed to join the domain {self._domain}. "
            "Please check credentials and OU settings.",
        )
        self._record("Successfully joined the domain.")
        return StepStatus.SUCCEEDED

    def _verify_join(self) -> StepStatus:
        self._record("Verifying the domain join...")
        self._check(
            commands.realm_discover(self._domain), "Failed to verify the domain join."
        )
        self._record("Domain verified successfully.")
        return StepStatus.SUCCEEDED

    def _restart_sssd(self) -> StepStatus:
        self._record("Restarting SSSD service...")
        self._check(
            commands.restart_service(self._settings.sssd_service),
            "Failed to restart SSSD service.",
        )
        self._record("SSSD service restarted.")
        return StepStatus.SUCCEEDED

    def _fetch_domain_info(self) -> StepStatus:
        self._record("Fetching domain information...")
        self._check(
            commands.adcli_info(self._domain), "Failed to fetch domain information."
        )
        self._record("Domain information fetched.")
        return StepStatus.SUCCEEDED

    def _enable_mkhomedir(self) -> StepStatus:
        self._record("Enabling PAM authentication and mkhomedir...")
        self._check(commands.enable_mkhomedir(), "Failed to enable PAM mkhomedir.")
        self._record("PAM authentication and mkhomedir enabled.")
        return StepStatus.SUCCEEDED

    def _configure_access(self) -> StepStatus:
        if self._prompter.confirm(
            "Do you want to configure sudo access and login permissions? (y/n)"
        ):
            policy = self._select_access_policy()
            self._update(access_policy=policy)
            self._apply_access_policy(policy)
            status = StepStatus.SUCCEEDED
        else:
            self._record("No sudo or login permissions configured. Skipping this step.")
            status = StepStatus.SKIPPED
        self._record(
            "To manually add/change/remove the allowed groups, "
            f"modify {self._files.sudoers_file}"
        )
        return status

    def _select_access_policy(self) -> AccessPolicy:
        menu = ["Choose the sudo and login access configuration:"]
        menu += [f" {choice.value}) {choice.label}" for choice in AccessChoice]
        answer = self._prompter.choose(
            "Enter your choice [1-4]",
            [choice.value for choice in AccessChoice],
            menu=menu,
            invalid_message="Invalid input. Please choose a number between 1 and 4.",
        )
        choice = AccessChoice(answer)
        if choice is AccessChoice.GROUP_SUDO:
            group = self._prompter.ask("Enter the AD group to grant sudo and login access")
            return AccessPolicy(choice, group_name=group)
        return AccessPolicy(choice)

    def _apply_access_policy(self, policy: AccessPolicy) -> None:
        started, finished = _ACCESS_MESSAGES[policy.choice]
        self._record(started.format(group=policy.group_name))

        line = policy.sudoers_line(self._domain)
        if line is not None:
            self._files.write_sudoers(line, overwrite=policy.overwrites_sudoers)

        permission = (
            commands.realm_permit_all() if policy.permits_login else commands.realm_deny_all()
        )
        self._check(permission, "Failed to update realm login permissions.")
        self._record(finished.format(group=policy.group_name))

    def _complete(self) -> None:
        self._record(BANNER_RULE)
        self._record(f"{PRODUCT_NAME} Completed Successfully")
        self._record(BANNER_RULE)
        self._reporter.echo(
            f"The {PRODUCT_NAME} process has been completed successfully."
        )

    def _offer_reboot(self) -> bool:
        """Ask for a reboot; a failing reboot command does not fail the run."""
        if not self._prompter.confirm("Would you like to reboot the system now? (yes/no)"):
            self._record("Please reboot the system later to apply changes.")
            return False

        self._record("Rebooting the system now...")
        result = self._executor.run(commands.reboot())
        if not result.ok:
            self._record("Failed to reboot the system. Please reboot manually.")
        return True
