"""Generation of rust-project.json for rust-analyzer."""

from __future__ import annotations

import glob
import json
import os
import subprocess
from dataclasses import dataclass, field


@dataclass
class Crate:
    """One crate entry of rust-project.json."""

    root_module: str
    edition: str = "2021"
    deps: list[str] = field(default_factory=list)
    cfg: list[str] = field(default_factory=lambda: ["test"])


@dataclass
class RustAnalyzerProject:
    """The contents of rust-project.json."""

    sysroot_src: str = ""
    crates: list[Crate] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Return the JSON-ready structure."""
        return {
            "sysroot_src": self.sysroot_src,
            "crates": [
                {
                    "root_module": crate.root_module,
                    "edition": crate.edition,
                    "deps": list(crate.deps),
                    "cfg": list(crate.cfg),
                }
                for crate in self.crates
            ],
        }

    def write_to_disk(self, path: str | os.PathLike = "./rust-project.json") -> None:
        """Write rust-project.json."""
        with open(path, "w", encoding="utf-8") as handle:
            json.dump(self.to_dict(), handle, separators=(",", ":"), ensure_ascii=False)

    def path_to_json(self, path: str | os.PathLike) -> None:
        """Add a crate for the path if it is a .rs file."""
        if os.path.splitext(os.fspath(path))[1] == ".rs":
            # cfg "test" lets rust-analyzer work inside #[test] blocks.
            self.crates.append(Crate(root_module=os.fspath(path)))

    def exercises_to_json(self, root: str | os.PathLike = "./exercises") -> None:
        """Add a crate for every .rs file below root."""
        pattern = os.path.join(os.fspath(root), "**", "*")
        for path in sorted(glob.glob(pattern, recursive=True, include_hidden=True)):
            self.path_to_json(path)

    def get_sysroot_src(self) -> None:
        """Find the standard library sources from RUST_SRC_PATH or rustc."""
        env_path = os.environ.get("RUST_SRC_PATH")
        if env_path is not None:
            self.sysroot_src = env_path
            return

        completed = subprocess.run(["rustc", "--print", "sysroot"], capture_output=True)
        text = (completed.stdout or b"").decode("utf-8", errors="replace")
        tokens = text.split()
        toolchain = tokens[0] if tokens else text

        print(f"Determined toolchain: {toolchain}\n")

        self.sysroot_src = os.path.join(toolchain, "lib", "rustlib", "src", "rust", "library")