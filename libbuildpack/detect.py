"""Everything available to a buildpack at detect time."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from libbuildpack import buildplan
from libbuildpack.application import Application, default_application
from libbuildpack.buildpack import Buildpack, default_buildpack
from libbuildpack.fsutil import argument
from libbuildpack.logger import Logger, default_logger
from libbuildpack.platform import Platform, default_platform
from libbuildpack.services import Service, default_services
from libbuildpack.stack import default_stack

__all__ = ["FAIL_STATUS_CODE", "PASS_STATUS_CODE", "Detect", "default_detect"]

FAIL_STATUS_CODE = 100
PASS_STATUS_CODE = 0


@dataclass
class Detect:
    """The components a buildpack works with during detection."""

    application: Application
    buildpack: Buildpack
    logger: Logger
    platform: Platform
    services: list[Service]
    stack: str
    writer: Callable[[buildplan.Plans], None]

    def error(self, code: int) -> int:
        """Return ``code`` as the exit status of a detection that went wrong."""
        self.logger.debug("Detection produced an error. Exiting with %d.", code)
        return code

    def fail(self) -> int:
        """Return the exit status of a detection that did not match."""
        self.logger.debug("Detection failed. Exiting with %d.", FAIL_STATUS_CODE)
        return FAIL_STATUS_CODE

    def pass_(self, *args: buildplan.Plan) -> int:
        """Write the build plan and return the exit status of a passing detection.

        The first plan is the primary one, any further plans are alternatives.
        """
        self.logger.debug("Detection passed. Exiting with %d.", PASS_STATUS_CODE)
        plans = buildplan.Plans()
        if args:
            plans.plan = args[0]
            plans.alternatives = list(args[1:])
        self.writer(plans)
        return PASS_STATUS_CODE


def default_detect() -> Detect:
    """Build a Detect from the command line, the working directory and the environment."""
    platform_root = argument(1)
    logger = default_logger(platform_root)
    application = default_application(logger)
    buildpack = default_buildpack(logger)
    platform = default_platform(platform_root, logger)
    services = default_services(platform, logger)
    stack = default_stack(logger)
    writer = buildplan.default_writer(2)
    return Detect(application, buildpack, logger, platform, services, stack, writer)