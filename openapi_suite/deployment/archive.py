# openapi_suite/deployment/archive.py
"""
Web archive packaging for the router deployment.

Builds `<name>.war` from compiled classes:

    WEB-INF/classes/<package path>/<Class>.class   (+ nested <Class>$*.class)
    WEB-INF/beans.xml                              (empty CDI marker)

Typical usage:

    from openapi_suite.deployment.archive import router_deployment

    war = router_deployment(settings)
    war.write(Path("build") / war.name, classes_dir=Path("target/test-classes"))
"""

from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from openapi_suite.core.settings import Settings, get_settings
from openapi_suite.errors import ConfigurationError

EMPTY_ASSET = b""
WEB_INF = "WEB-INF"
CLASSES_PREFIX = f"{WEB_INF}/classes"


def class_file_path(class_name: str) -> str:
    return class_name.replace(".", "/") + ".class"


@dataclass
class WebArchive:
    name: str
    classes: List[str] = field(default_factory=list)
    web_inf_resources: Dict[str, bytes] = field(default_factory=dict)

    def add_classes(self, *class_names: str) -> "WebArchive":
        for c in class_names:
            if c not in self.classes:
                self.classes.append(c)
        return self

    def add_as_web_inf_resource(self, content: bytes, target: str) -> "WebArchive":
        self.web_inf_resources[target.lstrip("/")] = content
        return self

    def _class_entries(self, classes_dir: Path) -> Iterable[tuple[str, Path]]:
        for class_name in self.classes:
            rel = Path(class_file_path(class_name))
            top = classes_dir / rel
            if not top.is_file():
                raise ConfigurationError(f"class file for {class_name} not found at {top}")
            yield f"{CLASSES_PREFIX}/{rel.as_posix()}", top
            # nested and anonymous classes travel with their outer class
            for inner in sorted(top.parent.glob(f"{top.stem}$*.class")):
                yield f"{CLASSES_PREFIX}/{rel.parent.as_posix()}/{inner.name}", inner

    def entries(self, classes_dir: Path) -> List[str]:
        names = [arcname for arcname, _ in self._class_entries(classes_dir)]
        names += [f"{WEB_INF}/{target}" for target in self.web_inf_resources]
        return names

    def to_bytes(self, classes_dir: Optional[Path]) -> bytes:
        if self.classes and classes_dir is None:
            raise ConfigurationError(f"{self.name} declares classes but no classes directory is configured")
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            if self.classes:
                for arcname, path in self._class_entries(Path(classes_dir)):
                    zf.write(path, arcname)
            for target, content in self.web_inf_resources.items():
                zf.writestr(f"{WEB_INF}/{target}", content)
        return buf.getvalue()

    def write(self, path: Path, classes_dir: Optional[Path]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_bytes(classes_dir))
        return path


def router_deployment(settings: Optional[Settings] = None) -> WebArchive:
    """The router application plus the legacy Contact resource, CDI enabled."""
    s = settings or get_settings()
    return (
        WebArchive(f"{s.deployment_name}.war")
        .add_classes(*s.deployment_classes)
        .add_as_web_inf_resource(EMPTY_ASSET, "beans.xml")
    )
