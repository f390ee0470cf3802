"""
Settings Validator

Advisory checks on a Configuration. The agent is authoritative, so a
failed check is logged and never blocks an update.
"""

from ...common.config import Configuration, UpdateFrequency
from ...common.logging_setup import get_service_logger

logger = get_service_logger("settings.validator")

FREQUENCIES = {f.value for f in UpdateFrequency}


class SettingsValidator:
    """Validates agent settings"""

    def validate(self, configuration: Configuration) -> tuple[bool, list[str]]:
        """
        Validate configuration.

        Args:
            configuration: Configuration to check

        Returns:
            Tuple of (is_valid, list of error messages)
        """
        errors: list[str] = []
        errors.extend(self._validate_logs(configuration))
        errors.extend(self._validate_updates(configuration))
        errors.extend(self._validate_flags(configuration))

        is_valid = len(errors) == 0

        if not is_valid:
            logger.warning(
                f"Settings validation failed: {len(errors)} errors",
                extra={"errors": errors},
            )
        else:
            logger.debug("Settings validation passed")

        return is_valid, errors

    def _validate_logs(self, configuration: Configuration) -> list[str]:
        errors = []
        logs = configuration.logs

        if logs.folder is not None and not isinstance(logs.folder, str):
            errors.append("Logs.Folder must be a string")

        if logs.max_files_number is not None:
            if not _is_int(logs.max_files_number) or logs.max_files_number < 1:
                errors.append("Logs.MaxFilesNumber must be an integer >= 1")

        for name, value in (
            ("MaxFilesSize", logs.max_files_size),
            ("MaxAgeDays", logs.max_age_days),
        ):
            if value is not None and (not _is_int(value) or value < 0):
                errors.append(f"Logs.{name} must be a non-negative integer")

        return errors

    def _validate_updates(self, configuration: Configuration) -> list[str]:
        errors = []
        updates = configuration.updates

        if updates.frequency is not None and updates.frequency not in FREQUENCIES:
            errors.append(
                f"Updates.Frequency '{updates.frequency}' is not one of "
                f"{', '.join(sorted(FREQUENCIES))}"
            )

        if updates.download_auto is not None and not isinstance(updates.download_auto, bool):
            errors.append("Updates.DownloadAuto must be a boolean")

        for name, value in (
            ("UpdateChannel", updates.update_channel),
            ("UpdateUrl", updates.update_url),
            ("UpdatePublicKey", updates.update_public_key),
        ):
            if value is not None and not isinstance(value, str):
                errors.append(f"Updates.{name} must be a string")

        return errors

    def _validate_flags(self, configuration: Configuration) -> list[str]:
        errors = []

        if configuration.debugging.show_panels is not None and not isinstance(
            configuration.debugging.show_panels, bool
        ):
            errors.append("Debugging.ShowPanels must be a boolean")

        if configuration.service.auto_start is not None and not isinstance(
            configuration.service.auto_start, bool
        ):
            errors.append("Service.AutoStart must be a boolean")

        return errors


def _is_int(value) -> bool:
    # bool is an int subclass but never a valid count
    return isinstance(value, int) and not isinstance(value, bool)
