import logging
import os
import time
from typing import Any, Mapping, Optional, Union
from erd_compose_core.lib.compare import compare_sources
from erd_compose_core.lib.descriptors import ChangeList


def diff_script(
    design: Union[str, Mapping[str, Any]],
    catalog: Any,
    *,
    schema: str
) -> ChangeList:
    """
    Generate the ordered change operations for a design against a catalog.

    Args:
        design: Design file path, raw JSON string, or parsed design document
        catalog: Catalog connection, DB2 connection string, JSON snapshot path, or list of rows
        schema: Schema whose tables are compared

    Returns:
        ChangeList in emission order
    """
    result = compare_sources(design, catalog, schema=schema)
    logging.info(f"Total: {len(result.flatten())} statements")
    return result


def deploy(
    source: Union[str, ChangeList],
    save_on: Optional[str] = None,
) -> dict:
    """
    Persist a generated script.

    Args:
        source: Script text or ChangeList to render
        save_on: Folder to write a timestamped .sql file into; None only previews

    Returns:
        Dictionary containing the result of the deployment
    """
    if isinstance(source, ChangeList):
        sql = source.to_sql()
        changes_count = len(source.flatten())
    else:
        sql = source
        changes_count = len([line for line in sql.splitlines() if line.rstrip().endswith(";")])

    if save_on is None:
        return {
            "status": "preview",
            "target": None,
            "changes_count": changes_count,
            "sql": sql,
            "message": "No output folder given - script not written"
        }

    os.makedirs(save_on, exist_ok=True)
    target = os.path.join(save_on, f"{int(time.time() * 1000)}.sql")
    with open(target, "w", encoding="utf-8") as f:
        f.write(sql)
    logging.info(f"Script written to {target}")

    return {
        "status": "success",
        "target": target,
        "changes_count": changes_count,
        "sql": sql,
        "message": f"Wrote {changes_count} statements to {target}"
    }
