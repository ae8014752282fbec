"""tauri-template-setup - personalize a create-tauri-react-app checkout.

Turns a fresh copy of the desktop template into a project of its own:
rewrites manifests and docs, regenerates the release workflow, bootstraps
git and tooling, then removes the template-only residue.
"""

__version__ = "0.1.0"
__author__ = "somus"
__email__ = "somus@users.noreply.github.com"

__all__ = ["__author__", "__email__", "__version__"]
