"""Locate or download the control-plane binaries used by integration tests."""

from __future__ import annotations

import os
import subprocess
import sys
import tempfile
from pathlib import Path

__all__ = [
    "BINARY_ASSETS_DIR",
    "EnvtestSetupError",
    "get_k8s_version",
    "etcd_binary_path",
    "validate_and_set_env_path",
    "ensure_envtest_assets",
]

ASSETS_ENV_VAR = "KUBEBUILDER_ASSETS"
VERSION_ENV_VAR = "ENVTEST_K8S_VERSION"
DEFAULT_K8S_VERSION = "1.32.0"
SETUP_ENVTEST_PACKAGE = "sigs.k8s.io/controller-runtime/tools/setup-envtest@latest"

BINARY_ASSETS_DIR = Path(tempfile.gettempdir()) / ".cache" / "kubebuilder-envtest"


class EnvtestSetupError(RuntimeError):
    """Raised when the envtest binaries cannot be located or installed."""


def get_k8s_version() -> str:
    """Return the Kubernetes version to use, in ``major.minor.patch`` form."""
    version = os.environ.get(VERSION_ENV_VAR, "")
    if not version:
        return DEFAULT_K8S_VERSION
    if "." not in version:
        return version + ".0"
    if len(version.split(".")) == 2:
        return version + ".0"
    return version


def etcd_binary_path(directory: str | os.PathLike[str]) -> Path:
    """Return where the etcd binary is expected inside ``directory``."""
    name = "etcd.exe" if sys.platform == "win32" else "etcd"
    return Path(directory) / name


def validate_and_set_env_path(path: str | os.PathLike[str]) -> str:
    """Check that ``path`` holds etcd and export it as the assets directory."""
    path_str = str(path)
    if not path_str:
        raise EnvtestSetupError("empty path received from setup-envtest")

    etcd = etcd_binary_path(path_str)
    if not etcd.exists():
        raise EnvtestSetupError(f"etcd binary not found at expected path {etcd}")

    print("Successfully downloaded envtest binaries to:", path_str)
    os.environ[ASSETS_ENV_VAR] = path_str
    print(f"{ASSETS_ENV_VAR} set to:", path_str)
    return path_str


def _run_setup_envtest(args: list[str]) -> subprocess.CompletedProcess[str]:
    """Run setup-envtest; a missing ``go`` toolchain counts as a failed run."""
    cmd = ["go", "run", SETUP_ENVTEST_PACKAGE, *args]
    try:
        return subprocess.run(cmd, capture_output=True, text=True, check=False)
    except OSError as exc:
        return subprocess.CompletedProcess(cmd, returncode=127, stdout="", stderr=str(exc))


def ensure_envtest_assets(assets_dir: str | os.PathLike[str] | None = None) -> str:
    """Make sure the envtest binaries are available and return their directory.

    An existing assets environment variable wins. Otherwise binaries already
    present in ``assets_dir`` are used, and failing that setup-envtest is run,
    first for the configured version and then for any installed version.
    """
    existing = os.environ.get(ASSETS_ENV_VAR, "")
    if existing:
        print(f"Using existing {ASSETS_ENV_VAR}:", existing)
        return existing

    directory = Path(assets_dir) if assets_dir is not None else BINARY_ASSETS_DIR
    print("Setting up envtest assets in:", directory)

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise EnvtestSetupError(f"failed to create envtest directory: {exc}") from exc

    if etcd_binary_path(directory).exists():
        os.environ[ASSETS_ENV_VAR] = str(directory)
        print(f"{ASSETS_ENV_VAR} set to:", directory)
        return str(directory)

    k8s_version = get_k8s_version()
    print(f"Downloading K8s {k8s_version} binaries using setup-envtest...")
    result = _run_setup_envtest(
        ["use", k8s_version, "-p", "path", "--bin-dir", str(directory)]
    )

    if result.returncode != 0:
        print("First attempt failed, trying with installed versions...")
        fallback = _run_setup_envtest(
            ["use", "-i", "--use-env", "-p", "path", "--bin-dir", str(directory)]
        )
        if fallback.returncode != 0:
            raise EnvtestSetupError(
                "failed to download envtest binaries: exit status "
                f"{result.returncode}\nStdout: {fallback.stdout}\nStderr: {fallback.stderr}"
            )
        result = fallback

    return validate_and_set_env_path((result.stdout or "").strip())