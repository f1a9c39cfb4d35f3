# Copyright 2017-2019 Sergej Schumilo, Cornelius Aschermann, Tim Blazytko
# Copyright 2019-2020 Intel Corporation
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import argparse
import os

import confuse
from flatdict import FlatDict

from fuzz_launcher.common.logger import logger


class FullPath(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, os.path.abspath(os.path.expanduser(values)))


def parse_is_dir(dirname):
    if not os.path.isdir(dirname):
        msg = "{0} is not a directory".format(dirname)
        raise argparse.ArgumentTypeError(msg)
    else:
        return dirname


def parse_target(name):
    if not name.strip():
        raise argparse.ArgumentTypeError("fuzz target name must not be blank")
    return name


def parse_toolchain(name):
    # accept both 'nightly' and '+nightly'
    return name.strip().lstrip('+')


def hidden(msg):
    if 'FUZZ_LAUNCHER_CONFIG_DEBUG' in os.environ:
        return msg
    return argparse.SUPPRESS

# General startup options
def add_args_general(parser):
    parser.add_argument('-h', '--help', action='help',
                        help='show this help message and exit')
    parser.add_argument('-v', '--verbose', required=False, action='store_true', default=False,
                        help='enable verbose output')
    parser.add_argument('-q', '--quiet', help='only print warnings and errors to console',
                        required=False, action='store_true', default=False)
    parser.add_argument('-l', '--log', metavar='<file>', action=FullPath, required=False, default=None,
                        help='enable logging to <file>')

# Engine/toolchain options
def add_args_engine(parser):
    parser.add_argument('--engine-path', metavar='<file>', required=False, default='cargo',
                        help='engine executable, resolved via $PATH (default: %(default)s)')
    parser.add_argument('--toolchain', metavar='<name>', required=False, type=parse_toolchain, default='nightly',
                        help='toolchain selector passed as +<name>, empty to disable (default: %(default)s)')
    parser.add_argument('-C', '--project-dir', metavar='<dir>', action=FullPath, type=parse_is_dir,
                        required=False, default='.', help='project directory the engine runs in')
    parser.add_argument('--fuzz-dir', metavar='<dir>', required=False, default=None,
                        help='fuzz crate directory, if not the engine default')
    parser.add_argument('--stop-flag', metavar='<flag>', required=False, default='--stop-after-first-failure',
                        help=hidden('engine flag requesting exit on the first failing input'))
    parser.add_argument('--failure-markers', metavar='<str>', nargs='*', required=False, default=[],
                        help=hidden('engine stderr markers identifying a found failure'))

# Positional target selection
def add_args_target(parser):
    parser.add_argument('target', metavar='<target>', nargs='?', type=parse_target, default=None,
                        help='fuzz target to run; list all targets if omitted')
    parser.add_argument('engine_args', metavar='<engine args>', nargs='*', default=[],
                        help='extra arguments forwarded to the engine (after --)')


class ConfigArgsParser():

    def _base_parser(self):
        short_usage = '%(prog)s [options] [<target> [-- <engine args> ...]]'
        return argparse.ArgumentParser(usage=short_usage, add_help=False)

    def _parse_with_config(self, parser, args=None):

        config = confuse.Configuration('fuzz_launcher', modname='fuzz_launcher')

        # check default config search paths
        config.read(defaults=True, user=True)

        # local / project config
        local_config = os.path.join(os.getcwd(), 'fuzz_launcher.yaml')
        if os.path.exists(local_config):
            config.set_file(local_config, base_for_paths=True)

        # ENV based config
        if 'FUZZ_LAUNCHER_CONFIG' in os.environ:
            config.set_file(os.environ['FUZZ_LAUNCHER_CONFIG'], base_for_paths=True)

        # merge all configs into a flat dictionary, delimiter = ':'
        config_values = FlatDict(config.flatten())
        if 'FUZZ_LAUNCHER_CONFIG_DEBUG' in os.environ:
            logger.info("Options picked up from config: %s" % str(dict(config_values)))

        # adopt defaults into parser, fixup path fields
        for action in parser._actions:
            if action.dest in config_values:
                if isinstance(action, FullPath) and config[action.dest].get() is not None:
                    action.default = config[action.dest].as_filename()
                else:
                    action.default = config[action.dest].get()
                action.required = False
                config_values.pop(action.dest)

        # remove options not defined in argparse
        for option in list(config_values.keys()):
            if 'FUZZ_LAUNCHER_CONFIG_DEBUG' in os.environ:
                logger.warn("Dropping unrecognized option '%s'." % option)
            config_values.pop(option)

        args = parser.parse_args(args)

        # FullPath only applies to values given on the command line
        args.project_dir = os.path.abspath(os.path.expanduser(args.project_dir))

        if 'FUZZ_LAUNCHER_CONFIG_DEBUG' in os.environ:
            logger.info("Final parsed args: %s" % repr(args))
        return args

    def parse_launch_options(self, args=None):

        parser = self._base_parser()

        general = parser.add_argument_group('General options')
        add_args_general(general)

        engine = parser.add_argument_group('Engine options')
        add_args_engine(engine)

        add_args_target(parser)

        return self._parse_with_config(parser, args)
