from importlib import metadata


def version_string():
    try:
        return metadata.version("keepmounted")
    except metadata.PackageNotFoundError:
        return '1.0.0'
