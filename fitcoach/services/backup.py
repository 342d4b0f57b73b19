"""Database backups: pg_dump to a local file, then an optional pCloud upload."""
import os
import subprocess

import requests
from flask import current_app

from fitcoach.errors import BackupError, record_system_log
from fitcoach.utils.dates import utcnow

PCLOUD_API = "https://api.pcloud.com"


def backup_filename(db_name, now=None):
    ts = (now or utcnow()).strftime("%Y-%m-%dT%H-%M-%S-%f")[:-3] + "Z"
    return f"{db_name}_{ts}.sql"


def run_pg_dump(file_path, config):
    user = config.get("DB_USER")
    if not user:
        raise BackupError("Database user is not configured. Set DB_USER or PGUSER on the server.")

    args = [
        config.get("PG_DUMP_PATH") or "pg_dump",
        "-h", str(config.get("DB_HOST") or "localhost"),
        "-p", str(config.get("DB_PORT") or 5432),
        "-U", user,
        "-d", config.get("DB_NAME"),
        "--no-owner",
        "--no-privileges",
        "-f", file_path,
    ]
    env = dict(os.environ, PGPASSWORD=config.get("DB_PASSWORD") or "")
    try:
        completed = subprocess.run(args, env=env, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, check=False)
    except FileNotFoundError:
        raise BackupError(
            "Failed to create backup: pg_dump command not found. Install PostgreSQL client tools "
            "and/or set PG_DUMP_PATH to the full path of the pg_dump executable."
        )
    if completed.returncode != 0:
        current_app.logger.error("pg_dump failed: %s", completed.stderr.decode(errors="replace").strip())
        raise BackupError(
            "Failed to create backup. Ensure PostgreSQL tools are installed (pg_dump) "
            "and DB credentials are correct."
        )


def _pcloud_get(method, timeout, **params):
    response = requests.get(f"{PCLOUD_API}/{method}", params=params, timeout=timeout)
    response.raise_for_status()
    return response.json()


def upload_to_pcloud(file_path, filename, access_token, folder_name="leqet_backups", timeout=30):
    """Upload to pCloud and return a public download link."""
    if not access_token:
        raise BackupError("PCLOUD_ACCESS_TOKEN is not configured on the server.")

    listing = _pcloud_get("listfolder", timeout, access_token=access_token, folderid=0)
    contents = (listing.get("metadata") or {}).get("contents") or []
    folder = next((f for f in contents if f.get("isfolder") and f.get("name") == folder_name), None)
    if folder:
        folder_id = folder["folderid"]
    else:
        created = _pcloud_get(
            "createfolderifnotexists", timeout, access_token=access_token, folderid=0, name=folder_name
        )
        folder_id = created["metadata"]["folderid"]

    with open(file_path, "rb") as fh:
        response = requests.post(
            f"{PCLOUD_API}/uploadfile",
            params={"access_token": access_token},
            data={"folderid": str(folder_id)},
            files={"file": (filename, fh)},
            timeout=timeout,
        )
    response.raise_for_status()
    metadata = response.json().get("metadata")
    if isinstance(metadata, list):
        metadata = metadata[0] if metadata else None
    if not metadata or not metadata.get("fileid"):
        raise BackupError("pCloud upload did not return a file ID.")

    link = _pcloud_get("getfilelink", timeout, access_token=access_token, fileid=metadata["fileid"])
    hosts = link.get("hosts") or []
    if not hosts or not link.get("path"):
        raise BackupError("Failed to retrieve public link from pCloud.")
    return f"https://{hosts[0]}{link['path']}"


def create_backup():
    config = current_app.config
    backup_dir = config["BACKUP_DIR"]
    os.makedirs(backup_dir, exist_ok=True)

    started = utcnow()
    filename = backup_filename(config["DB_NAME"], started)
    file_path = os.path.join(backup_dir, filename)

    run_pg_dump(file_path, config)
    record_system_log("backup", f"Database backup created: {filename}")

    public_link = None
    try:
        public_link = upload_to_pcloud(
            file_path, filename, config.get("PCLOUD_ACCESS_TOKEN"), config.get("PCLOUD_FOLDER", "leqet_backups")
        )
    except (requests.RequestException, BackupError, KeyError, ValueError) as e:
        current_app.logger.warning("pCloud upload failed, local backup kept: %s", e)

    return {
        "success": True,
        "message": "Backup created and uploaded to pCloud" if public_link else "Backup created locally",
        "timestamp": utcnow().isoformat() + "Z",
        "filename": filename,
        "publicLink": public_link,
    }
