import os
import requests
import tarfile
import tempfile
import shutil
import sys
import contextlib
from ..cli_logger import logger

# -------------------- Helpers: safe paths & extraction --------------------

def _safe_join(base, *paths):
    """Safely join paths, preventing path traversal attacks."""
    base = os.path.abspath(base)
    final = os.path.abspath(os.path.join(base, *paths))
    if not final.startswith(base + os.sep) and final != base:
        raise IOError(f"Unsafe path detected: {final}")
    return final

def _safe_extract_tar(tar_ref: tarfile.TarFile, dest_dir: str, log_each=False):
    """Safely extract a tar file, preventing path traversal attacks."""
    for member in tar_ref.getmembers():
        # deny absolute or parent traversal
        member_path = _safe_join(dest_dir, member.name)
        if member.isdir():
            if log_each:
                logger.step_info(f"creating: {member.name}", indent=3)
            os.makedirs(member_path, exist_ok=True)
            continue
        if member.issym():
            # link targets get the same traversal check as regular members
            _safe_join(dest_dir, os.path.dirname(member.name), member.linkname)
            os.makedirs(os.path.dirname(member_path), exist_ok=True)
            if os.path.lexists(member_path):
                os.remove(member_path)
            os.symlink(member.linkname, member_path)
            continue
        if member.islnk():
            os.makedirs(os.path.dirname(member_path), exist_ok=True)
            shutil.copy2(_safe_join(dest_dir, member.linkname), member_path)
            continue
        os.makedirs(os.path.dirname(member_path), exist_ok=True)
        if log_each:
            logger.step_info(f"extracting: {member.name}", indent=2)
        src = tar_ref.extractfile(member)
        if src is None:
            # could be special file; skip silently
            continue
        with src as src_file:
            with open(member_path, "wb") as out:
                shutil.copyfileobj(src_file, out)
            # Preserve file permissions, FFmpeg's configure must stay executable
            if member.mode:
                os.chmod(member_path, member.mode)


def extract(filepath, dest_dir):
    """Extracts a tar archive (any compression) and removes the archive.

    Members are unpacked into a staging directory inside ``dest_dir`` and only
    moved into place once the whole archive was extracted, so a failure never
    leaves a partial tree behind.
    """
    os.makedirs(dest_dir, exist_ok=True)
    filename = os.path.basename(filepath)

    staging_dir = tempfile.mkdtemp(prefix=".extract-", dir=dest_dir)
    try:
        if not tarfile.is_tarfile(filepath):
            logger.error(f"Unsupported archive type for {filename}.")
            return None
        with tarfile.open(filepath, 'r:*') as tar:
            _safe_extract_tar(tar, staging_dir)

        for entry in os.listdir(staging_dir):
            target = os.path.join(dest_dir, entry)
            if os.path.isdir(target) and not os.path.islink(target):
                shutil.rmtree(target)
            os.replace(os.path.join(staging_dir, entry), target)

        os.remove(filepath)

        logger.success(f"Successfully extracted {filename} to {dest_dir}")
        return dest_dir

    except (tarfile.TarError, IOError) as e:
        logger.error(f"Error during extraction: {e}")
        return None
    finally:
        shutil.rmtree(staging_dir, ignore_errors=True)

# -------------------- Download & Extract --------------------

def download(url, filepath, timeout=60):
    """Stream ``url`` into ``filepath``. Returns the path, or None on failure."""
    temp_filepath = filepath + ".tmp"
    filename = os.path.basename(filepath)

    try:
        os.makedirs(os.path.dirname(temp_filepath), exist_ok=True)

        with requests.get(url, stream=True, timeout=timeout) as r:
            r.raise_for_status()
            total_size = int(r.headers.get('content-length', 0))

            with open(temp_filepath, 'wb') as f:
                chunks = logger.progress(
                    r.iter_content(chunk_size=1024 * 256),  # 256KB chunks
                    description=f"Downloading {filename}",
                    total=total_size,
                )
                for chunk in chunks:
                    if chunk:  # keep-alive chunks may be empty
                        f.write(chunk)

        # Atomic rename
        os.replace(temp_filepath, filepath)
        return filepath

    except requests.exceptions.RequestException as e:
        logger.error(f"Error downloading {url}: {e}")
        _remove_partial(temp_filepath)
        return None
    except OSError as e:
        logger.error(f"Error writing {temp_filepath}: {e}")
        logger.exception(*sys.exc_info())
        _remove_partial(temp_filepath)
        return None


def _remove_partial(path):
    with contextlib.suppress(OSError):
        if os.path.exists(path):
            os.remove(path)


def download_and_extract(url, dest_dir, filename=None, timeout=60):
    """Download an archive into dest_dir, extract it there and drop the archive."""
    os.makedirs(dest_dir, exist_ok=True)
    if filename is None:
        filename = url.split('/')[-1]
    filepath = os.path.join(dest_dir, filename)

    if download(url, filepath, timeout=timeout) is None:
        return None

    logger.step_info(f"Archive:  {filename}")
    return extract(filepath, dest_dir)
