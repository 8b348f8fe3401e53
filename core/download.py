# Download and extract the speech commands archive; each step is skipped if its output exists.

import logging
import os
import shutil
import tarfile

import requests

CHUNK_SIZE = 1 << 20

# download url to path; return True iff a download was done
def download(url, path):
    if os.path.exists(path):
        logging.info(f'Skipping download since {path} already exists')
        return False

    dir_name = os.path.dirname(path)
    if len(dir_name) > 0 and not os.path.exists(dir_name):
        os.makedirs(dir_name)

    logging.info(f'Downloading {url}')
    # write to a temporary name so an interrupted download isn't mistaken for a complete one
    temp_path = f'{path}.part'
    with requests.get(url, stream=True) as response:
        response.raise_for_status()
        with open(temp_path, 'wb') as out_file:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                out_file.write(chunk)

    shutil.move(temp_path, path)
    logging.info(f'Saved {path} ({os.path.getsize(path) / (1 << 20):.1f} MB)')
    return True

# extract a tar.gz archive into dest; return True iff an extraction was done
def extract(archive_path, dest):
    if os.path.exists(dest):
        logging.info(f'Skipping extraction since {dest} already exists')
        return False

    logging.info(f'Extracting {archive_path} to {dest}')
    temp_dest = f'{dest}.part'
    if os.path.exists(temp_dest):
        shutil.rmtree(temp_dest)

    with tarfile.open(archive_path, 'r:gz') as tar:
        # extraction filters exist in 3.12+ and in security releases of 3.9-3.11
        if hasattr(tarfile, 'data_filter'):
            tar.extractall(temp_dest, filter='data')
        else:
            tar.extractall(temp_dest)

    shutil.move(temp_dest, dest)
    return True
