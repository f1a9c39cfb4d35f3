# Copyright (C) 2019-2020 Intel Corporation
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Resolve the catalog of fuzz targets defined for a project.

The catalog is queried fresh from the engine on every call and kept in the
order the engine reports it.
"""

import sys

from fuzz_launcher.common.logger import logger


def resolve_catalog(engine):
    catalog = tuple(engine.list_targets())
    logger.debug("%s Found %d fuzz targets." % (engine, len(catalog)))
    return catalog


def print_catalog(catalog, out=None):
    out = out or sys.stdout
    for target in catalog:
        out.write(target + "\n")
    out.flush()
