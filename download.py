# Download the speech commands dataset and extract it under data/.
# Steps whose output already exists are skipped.

import argparse
import logging
import sys

import requests

from core import constants
from core import download

if __name__ == '__main__':

    # command-line arguments
    parser = argparse.ArgumentParser()
    parser.add_argument('-u', type=str, default=constants.DATASET_URL, help=f'Archive URL. Default = {constants.DATASET_URL}.')
    parser.add_argument('-o', type=str, default=constants.ARCHIVE_PATH, help=f'Where to save the archive. Default = {constants.ARCHIVE_PATH}.')
    parser.add_argument('-d', type=str, default=constants.DATASET_DIR, help=f'Where to extract the archive. Default = {constants.DATASET_DIR}.')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s.%(msecs)03d %(message)s', datefmt='%H:%M:%S')

    try:
        download.download(args.u, args.o)
    except requests.RequestException as e:
        logging.error(f'Error: download failed: {e}')
        sys.exit(1)

    download.extract(args.o, args.d)
