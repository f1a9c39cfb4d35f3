# Copyright 2017-2019 Sergej Schumilo, Cornelius Aschermann, Tim Blazytko
# Copyright 2019-2020 Intel Corporation
#
# SPDX-License-Identifier: AGPL-3.0-or-later

OKBLUE =     '\033[94m'
WARNING =    '\033[0;33m'
FAIL =       '\033[91m'
ENDC =       '\033[0m'
FLUSH_LINE = '\r\x1b[K'

WARNING_PREFIX =  "[WARN] "
ERROR_PREFIX =    "[ERROR] "
