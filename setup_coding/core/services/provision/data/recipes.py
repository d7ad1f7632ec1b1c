"""
L0 Data — Provisioning recipe table.

One recipe per provisionable item. A recipe is a pure function of
(SystemFacts, request) returning the ordered steps to run; building one
never touches the system, so every recipe can be inspected and tested
without spawning a process.

The program names and argument literals below are the process-boundary
contract with apt, snap, curl, gpg and the OpenSSH tools. Keep them
byte-for-byte stable.

To add a provisionable item, write a builder and add a RECIPES entry.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from setup_coding.core.models.facts import SystemFacts
from setup_coding.core.models.request import SshKeyRequest, SystemUpdateRequest, ToolRequest
from setup_coding.core.models.step import InputSource, Step

# (facts, request) -> steps. Facts are None only for recipes that do not
# declare needs_facts; build_pipeline enforces that.
Builder = Callable[..., list[Step]]

KEYRINGS = "/usr/share/keyrings"
APT_SOURCES = "/etc/apt/sources.list.d"

DEFAULT_DOCKER_COMPOSE_VERSION = "1.29.2"
COMPOSE_RELEASES = "https://github.com/docker/compose/releases"


@dataclass(frozen=True)
class Recipe:
    """A table entry: how to build the steps for one item."""

    key: str
    label: str
    build: Builder
    needs_facts: bool = False


# ── Step helpers ────────────────────────────────────────────────


def _run(label: str, *argv: str, stdin: InputSource = InputSource.INHERIT,
         critical: bool = True) -> Step:
    """An interactive step: stdin and stdout inherited."""
    return Step(
        program=argv[0], args=argv[1:], input_source=stdin,
        label=label, critical=critical,
    )


def _produce(label: str, *argv: str) -> Step:
    """A step whose stdout feeds the next step."""
    return Step(
        program=argv[0], args=argv[1:], input_source=InputSource.NONE,
        captures_output=True, label=label,
    )


def _consume(label: str, *argv: str) -> Step:
    """A step reading the previous step's stdout."""
    return Step(program=argv[0], args=argv[1:], input_source=InputSource.PIPE, label=label)


def _write_source_list(line: str, list_file: str) -> list[Step]:
    """``echo "<line>" | sudo tee <list_file>``"""
    return [
        _produce("repository line", "echo", line),
        _consume("write sources file", "sudo", "tee", f"{APT_SOURCES}/{list_file}"),
    ]


# ── L0: System updates ──────────────────────────────────────────


def _update_system(facts: SystemFacts | None, request: SystemUpdateRequest) -> list[Step]:
    return [_run("update package index", "sudo", "apt-get", "update")]


def _update_dependencies(facts: SystemFacts | None, request: SystemUpdateRequest) -> list[Step]:
    return [
        _run(
            "install dependencies",
            "sudo", "apt", "install",
            "apt-transport-https", "build-essential", "ca-certificates",
            "curl", "gnupg", "lsb-release",
        ),
    ]


def _update_cleanup(facts: SystemFacts | None, request: SystemUpdateRequest) -> list[Step]:
    return [
        _run("remove unused packages", "sudo", "apt-get", "autoremove"),
        _run("clean package cache", "sudo", "apt-get", "autoclean"),
    ]


# ── L0: Tools ───────────────────────────────────────────────────


def _brave_browser(facts: SystemFacts, request: ToolRequest) -> list[Step]:
    keyring = f"{KEYRINGS}/brave-browser-archive-keyring.gpg"
    return [
        _run(
            "download gpg key",
            "sudo", "curl", "-fsSLo", keyring,
            "https://brave-browser-apt-release.s3.brave.com/brave-browser-archive-keyring.gpg",
        ),
        *_write_source_list(
            f"deb [signed-by={keyring} arch={facts.architecture}] "
            "https://brave-browser-apt-release.s3.brave.com/ stable main",
            "brave-browser-release.list",
        ),
        _run("update apt", "sudo", "apt", "update"),
        _run("install brave-browser", "sudo", "apt", "install", "brave-browser"),
    ]


def _code(facts: SystemFacts, request: ToolRequest) -> list[Step]:
    return [_run("install code", "sudo", "snap", "install", "code", "--classic")]


def _docker(facts: SystemFacts, request: ToolRequest) -> list[Step]:
    keyring = f"{KEYRINGS}/docker-archive-keyring.gpg"
    return [
        _produce("download gpg key", "curl", "-fsSL", "https://download.docker.com/linux/ubuntu/gpg"),
        _consume("import gpg key", "sudo", "gpg", "--dearmor", "-o", keyring),
        *_write_source_list(
            f"deb [arch={facts.architecture} signed-by={keyring}] "
            f"https://download.docker.com/linux/ubuntu {facts.distro_codename} stable",
            "docker.list",
        ),
        _run("update apt", "sudo", "apt-get", "update"),
        _run(
            "install docker",
            "sudo", "apt-get", "install", "docker-ce", "docker-ce-cli", "containerd.io",
        ),
    ]


def _docker_compose(facts: SystemFacts, request: ToolRequest) -> list[Step]:
    version = request.version or DEFAULT_DOCKER_COMPOSE_VERSION
    target = "/usr/local/bin/docker-compose"
    asset = f"docker-compose-{facts.kernel_name}-{facts.hardware_name}"
    if version == "latest":
        url = f"{COMPOSE_RELEASES}/latest/download/{asset}"
    else:
        url = f"{COMPOSE_RELEASES}/download/{version}/{asset}"
    return [
        _run("download docker-compose", "sudo", "curl", "-L", url, "-o", target),
        _run("make executable", "sudo", "chmod", "+x", target),
        _run("link into /usr/bin", "sudo", "ln", "-s", target, "/usr/bin/docker-compose"),
    ]


def _gh(facts: SystemFacts, request: ToolRequest) -> list[Step]:
    keyring = f"{KEYRINGS}/githubcli-archive-keyring.gpg"
    return [
        _produce(
            "download gpg key",
            "curl", "-fsSL", "https://cli.github.com/packages/githubcli-archive-keyring.gpg",
        ),
        _consume("write gpg key", "sudo", "dd", f"of={keyring}"),
        *_write_source_list(
            f"deb [arch={facts.architecture} signed-by={keyring}] "
            "https://cli.github.com/packages stable main",
            "github-cli.list",
        ),
        _run("update apt", "sudo", "apt", "update"),
        _run("install gh", "sudo", "apt", "install", "gh"),
        # login is interactive and may be declined; gh is installed either way
        _run("log into gh", "gh", "auth", "login", critical=False),
    ]


def _git(facts: SystemFacts, request: ToolRequest) -> list[Step]:
    return [_run("install git", "sudo", "apt", "install", "git-all")]


def _rustc(facts: SystemFacts, request: ToolRequest) -> list[Step]:
    return [
        _produce("download rustup", "curl", "--proto", "=https", "--tlsv1.2", "-sSf", "https://sh.rustup.rs"),
        _consume("run rustup", "sh"),
    ]


# ── L0: Keys ────────────────────────────────────────────────────

# Evaluates the ``ssh-agent -s`` environment read from stdin, then adds
# the key ($1) to that agent.
_AGENT_ADD_SCRIPT = 'eval "$(cat)" >/dev/null && exec ssh-add "$1"'


def _ssh_key(facts: SystemFacts | None, request: SshKeyRequest) -> list[Step]:
    steps: list[Step] = []
    if not request.uses_default_dir:
        steps.append(
            _run("key-dir", "mkdir", "-p", "-m", "700", request.key_dir, stdin=InputSource.NONE)
        )
    steps += [
        _run(
            "keygen",
            "ssh-keygen", "-t", request.algorithm, "-C", request.email,
            "-f", request.private_key_path,
        ),
        _produce("agent-start", "ssh-agent", "-s"),
        _consume("agent-add", "sh", "-c", _AGENT_ADD_SCRIPT, "ssh-add", request.private_key_path),
    ]
    if request.upload:
        title = request.title or request.email
        steps.append(
            _run(
                "upload to github",
                "gh", "ssh-key", "add", request.public_key_path, "--title", title,
            )
        )
    return steps


# ── Table ───────────────────────────────────────────────────────

RECIPES: dict[str, Recipe] = {
    r.key: r
    for r in (
        Recipe("update:system", "Update system", _update_system),
        Recipe("update:dependencies", "Install build dependencies", _update_dependencies),
        Recipe("update:cleanup", "Clean up packages", _update_cleanup),
        Recipe("tool:brave-browser", "Brave Browser", _brave_browser, needs_facts=True),
        Recipe("tool:code", "Visual Studio Code", _code, needs_facts=True),
        Recipe("tool:docker", "Docker", _docker, needs_facts=True),
        Recipe("tool:docker-compose", "Docker Compose", _docker_compose, needs_facts=True),
        Recipe("tool:gh", "GitHub CLI", _gh, needs_facts=True),
        Recipe("tool:git", "Git", _git, needs_facts=True),
        Recipe("tool:rustc", "Rust (rustup)", _rustc, needs_facts=True),
        Recipe("key:ssh", "SSH key", _ssh_key),
    )
}

KNOWN_TOOLS: tuple[str, ...] = tuple(
    key.split(":", 1)[1] for key in RECIPES if key.startswith("tool:")
)
