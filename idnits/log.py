# Copyright The IETF Trust 2007-2026, All Rights Reserved
# -*- coding: utf-8 -*-


import logging
import inspect
import os.path

from idnits import settings

formatter = logging.Formatter('{levelname}: {name}:{lineno}: {message}', style='{')
for name, level in settings.UTILS_LOGGER_LEVELS.items():
    logger = logging.getLogger(name)
    if not logger.hasHandlers():
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)
    logger.setLevel(level)

logger = logging.getLogger('idnits')


def getcaller():
    parent, pfile, pline, pfunction, lines, index = inspect.stack()[2]
    pmodule = inspect.getmodulename(pfile)
    return (pmodule, pfunction, pfile, pline)

def log(msg, level=logging.INFO):
    "Logs the given calling point and message."
    if not isinstance(msg, str):
        msg = str(msg)
    try:
        mod, func, file, line = getcaller()
        file = os.path.basename(file)
        if func == "<module>":
            where = ""
        else:
            where = " in " + func + "()"
    except IndexError:
        file, line, where = "<UNKNOWN>", 0, ""
    logger.log(level, "%s(%d)%s: %s" % (file, line, where, msg))
