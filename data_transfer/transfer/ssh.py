"""
SSH command construction.

Builds the ``ssh`` argument vectors used to dispatch the remote export and
to serve as rsync's remote shell, including the optional jump-host clause.
"""

import shlex
from typing import List

from data_transfer.models.config import SshProxyConfig, TransferConfig
from data_transfer.utils.helpers import split_options

SSH_BINARY = "ssh"


def build_proxy_option(proxy: SshProxyConfig) -> List[str]:
    """
    Build the ``-o ProxyCommand=...`` clause for a jump host.

    Returns an empty list unless both proxy host and proxy user are set.
    """
    if not proxy.enabled:
        return []

    proxy_command = ["ssh", "-W", "%h:%p", *split_options(proxy.options), f"{proxy.user}@{proxy.host}"]
    # ssh runs ProxyCommand through a shell
    return ["-o", f"ProxyCommand={shlex.join(proxy_command)}"]


def build_ssh_base(config: TransferConfig) -> List[str]:
    """``ssh`` followed by the configured options and the proxy clause."""
    return [SSH_BINARY, *split_options(config.ssh_options), *build_proxy_option(config.ssh_proxy)]


def remote_target(config: TransferConfig) -> str:
    return f"{config.remote_user}@{config.remote_host}"


def build_export_script(config: TransferConfig) -> str:
    """
    The shell line run on the remote host.

    It changes into the remote directory and runs the export command of the
    remote console script, merging stderr into stdout so remote errors show
    up in the captured output.
    """
    parts = [config.console_script]
    if config.remote_env:
        parts.append(f"--env={shlex.quote(config.remote_env)}")
    parts.append("export")
    return f"cd {shlex.quote(config.remote_dir)} ; {' '.join(parts)} 2>&1"


def build_export_command(config: TransferConfig) -> List[str]:
    """Full argument vector dispatching the export over SSH."""
    return [*build_ssh_base(config), remote_target(config), build_export_script(config)]


def build_remote_shell(config: TransferConfig) -> str:
    """The ssh invocation as one string, for rsync's ``-e`` option."""
    return shlex.join(build_ssh_base(config))
