# Utility functions

import os

from core import constants

AUDIO_EXTS = [
  '.3gp', '.3gpp', '.aac', '.aiff', '.amr', '.au', '.flac', '.m4a', '.mp3', '.mp4',
  '.oga', '.ogg', '.opus', '.wav', '.webm', '.wma',
]

# return list of audio files in the given directory;
# returned file names are fully qualified paths
def get_audio_files(path):
    files = []
    if os.path.isdir(path):
        for file_name in os.listdir(path):
            file_path = os.path.join(path, file_name)
            if is_audio_file(file_path):
                files.append(file_path)

    return sorted(files)

# return list of strings representing the lines in a text file,
# removing leading and trailing whitespace and ignoring blank lines
# and lines that start with #
def get_file_lines(path):
    with open(path, 'r') as file:
        lines = []
        for line in file.readlines():
            line = line.strip()
            if len(line) > 0 and line[0] != '#':
                lines.append(line)

        return lines

# return a list of class names from the classes file; line order defines the class ids
def get_class_list(class_file_path=constants.CLASSES_FILE):
    return get_file_lines(class_file_path)

# write the class names, one per line, so prediction uses the same class ids as training
def save_class_list(class_names, class_file_path=constants.CLASSES_FILE):
    dir_name = os.path.dirname(class_file_path)
    if len(dir_name) > 0 and not os.path.exists(dir_name):
        os.makedirs(dir_name)

    with open(class_file_path, 'w') as file:
        for name in class_names:
            file.write(f'{name}\n')

# return True iff given path is an audio file
def is_audio_file(file_path):
    if os.path.isfile(file_path):
        base, ext = os.path.splitext(file_path)
        if ext != None and len(ext) > 0 and ext.lower() in AUDIO_EXTS:
            return True

    return False

# return elapsed seconds as a 'Xm Ys' string
def format_elapsed(elapsed):
    minutes = int(elapsed) // 60
    seconds = int(elapsed) % 60
    return f'{minutes}m {seconds}s'

# return the size of a file or directory tree in MB
def get_size_mb(path):
    if os.path.isfile(path):
        return os.path.getsize(path) / (1 << 20)

    total = 0
    for dir_path, _, file_names in os.walk(path):
        for file_name in file_names:
            total += os.path.getsize(os.path.join(dir_path, file_name))

    return total / (1 << 20)
