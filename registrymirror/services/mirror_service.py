"""
Mirror configuration service for registrymirror.

Adds and removes containerd hosts.toml files that route pulls for a set
of registries through local mirrors. Each registry gets its own directory,
{config_path}/{registry host}/, which this service exclusively owns.

Batches are not transactional: a failure on one registry aborts the batch
but leaves the directories written for earlier registries in place.
"""

import logging
import posixpath
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..domain.registry import RegistryURL, MirrorEndpoint
from ..domain.operation import MirrorOperationResult, OperationStatus, RegistryOperation
from ..domain.errors import FilesystemError, RegistryURLError
from ..hosts import HOSTS_FILE_NAME, render_hosts_file
from ..infra.filesystem import Filesystem
from ..validation import validate_registry_url

logger = logging.getLogger(__name__)

RegistryLike = Union[str, RegistryURL]


class MirrorConfigurationService:
    """
    Service for writing and removing per-registry mirror configuration.

    Example:
        service = MirrorConfigurationService(LocalFilesystem(), "/etc/containerd/certs.d")
        service.add(["https://docker.io"], ["http://127.0.0.1:5000"])
        service.remove(["https://docker.io"])
    """

    def __init__(
        self,
        filesystem: Filesystem,
        config_path: str,
        server_overrides: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize MirrorConfigurationService.

        Args:
            filesystem: Filesystem implementation to persist files with
            config_path: containerd registry config directory
            server_overrides: Host to server URL table for the renderer
        """
        self.fs = filesystem
        self.config_path = str(config_path)
        self.server_overrides = server_overrides

    def registry_dir(self, registry: RegistryURL) -> str:
        return posixpath.join(self.config_path, registry.host)

    def hosts_file_path(self, registry: RegistryLike) -> str:
        """Path of the hosts file for a registry."""
        registry = self._validate(registry)
        return posixpath.join(self.registry_dir(registry), HOSTS_FILE_NAME)

    def add(
        self,
        registries: Iterable[RegistryLike],
        mirrors: Sequence[Union[str, MirrorEndpoint]],
    ) -> MirrorOperationResult:
        """
        Write hosts.toml for every registry, all using the same mirrors.

        Args:
            registries: Registry URLs to mirror
            mirrors: Ordered mirror URLs (first is primary)

        Returns:
            MirrorOperationResult with one WRITTEN entry per registry

        Raises:
            RegistryURLError: on the first invalid registry
            FilesystemError: if a directory or file cannot be written
        """
        endpoints = MirrorEndpoint.from_urls(mirrors)
        result = MirrorOperationResult(action='add')

        for raw in registries:
            registry = self._validate(raw)
            directory = self.registry_dir(registry)
            file_path = posixpath.join(directory, HOSTS_FILE_NAME)

            content = render_hosts_file(registry, endpoints, self.server_overrides)
            self._call('makedirs', directory, self.fs.makedirs, directory)
            self._call('write_file', file_path, self.fs.write_file, file_path, content)

            logger.info(f"Wrote mirror configuration for {registry} to {file_path}")
            result.operations.append(RegistryOperation(
                registry=str(registry),
                host=registry.host,
                path=file_path,
                status=OperationStatus.WRITTEN,
            ))

        return result

    def remove(self, registries: Iterable[RegistryLike]) -> MirrorOperationResult:
        """
        Remove the config directory of every registry.

        Directories that do not exist are reported as ABSENT.

        Raises:
            RegistryURLError: on the first invalid registry
            FilesystemError: for any removal failure other than not-found
        """
        result = MirrorOperationResult(action='remove')

        for raw in registries:
            registry = self._validate(raw)
            directory = self.registry_dir(registry)

            if self._exists(directory):
                try:
                    self.fs.remove_tree(directory)
                    status = OperationStatus.REMOVED
                except FileNotFoundError:
                    status = OperationStatus.ABSENT
                except (OSError, ValueError) as e:
                    raise FilesystemError('remove_tree', directory, e) from e
            else:
                status = OperationStatus.ABSENT

            if status == OperationStatus.REMOVED:
                logger.info(f"Removed mirror configuration for {registry} from {directory}")
            else:
                logger.debug(f"No mirror configuration for {registry} at {directory}")

            result.operations.append(RegistryOperation(
                registry=str(registry),
                host=registry.host,
                path=directory,
                status=status,
            ))

        return result

    def status(self, registries: Iterable[RegistryLike]) -> List[Dict[str, Any]]:
        """
        Report whether each registry currently has a hosts file.

        Returns:
            List of dicts with registry, host, path and configured keys
        """
        statuses = []
        for raw in registries:
            registry = self._validate(raw)
            file_path = posixpath.join(self.registry_dir(registry), HOSTS_FILE_NAME)
            statuses.append({
                'registry': str(registry),
                'host': registry.host,
                'path': file_path,
                'configured': self._exists(file_path),
            })
        return statuses

    def _validate(self, registry: RegistryLike) -> RegistryURL:
        try:
            return validate_registry_url(registry)
        except RegistryURLError as e:
            logger.warning(str(e))
            raise

    def _exists(self, path: str) -> bool:
        try:
            self.fs.stat(path)
        except FileNotFoundError:
            return False
        except (OSError, ValueError) as e:
            raise FilesystemError('stat', path, e) from e
        return True

    @staticmethod
    def _call(operation: str, path: str, func, *args) -> None:
        try:
            func(*args)
        except (OSError, ValueError) as e:
            raise FilesystemError(operation, path, e) from e
