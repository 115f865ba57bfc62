"""Input loader for package-results files.

The packaging step writes a JSON list of records, one per IIS site, each
with at least ``SiteName`` and ``SitePackagePath``. Sites that failed to
package carry a null path and are skipped here.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from .errors import EmptyInputError, ParseError
from .models import PackagedSite, PackageResult

logger = logging.getLogger(__name__)


def read_package_results(path: str | Path) -> list[PackageResult]:
    """Read and validate every record in a package-results file.

    Raises:
        ParseError: File missing, unreadable, not JSON, or records malformed.
    """
    path = Path(path)
    if not path.is_file():
        raise ParseError(f"Package results file not found: {path}")

    try:
        # utf-8-sig: PowerShell's Out-File writes a byte-order mark
        with open(path, encoding="utf-8-sig") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Could not read package results file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ParseError(f"Package results file {path} is not valid JSON: {e}") from e

    # ConvertTo-Json collapses a one-element array into a bare object
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ParseError(
            f"Package results file {path} must contain a list of site records, "
            f"got {type(data).__name__}"
        )

    records = []
    for index, raw in enumerate(data):
        if not isinstance(raw, dict):
            raise ParseError(
                f"Record {index} in {path} is not an object: {raw!r}"
            )
        try:
            records.append(PackageResult.model_validate(raw))
        except PydanticValidationError as e:
            raise ParseError(f"Record {index} in {path} is invalid: {e}") from e
    return records


def load_sites(path: str | Path) -> list[PackagedSite]:
    """Load the sites that have a package, in file order.

    Raises:
        ParseError: See read_package_results.
        EmptyInputError: No record has a package path.
    """
    records = read_package_results(path)

    sites = []
    for record in records:
        if not record.has_package:
            logger.info("Skipping site %r: no package path", record.site_name)
            continue
        sites.append(
            PackagedSite(
                site_name=record.site_name,
                site_package_path=record.site_package_path.strip(),
            )
        )

    if not sites:
        raise EmptyInputError(
            f"No successfully packaged sites found in {path} "
            f"({len(records)} record(s), none with a SitePackagePath)"
        )

    logger.info("Loaded %d packaged site(s) from %s", len(sites), path)
    return sites
