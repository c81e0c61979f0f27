#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Banner and usage text.
"""

ASCII_ART = r"""
  %%%%%%\          %%\        %%%%%%\                    %%%%%%\
 %%  __%%\         \__|       %%   %%\                        %%\
 %% /  \__|%%%%%%\ %%\%%%%%%\ %%    %%\ %%%%%%\  %%%%%%%\     %% |
 \%%%%%%\ %%  __%%\%% %%  _%%\%%    %% %%    %%\%%  _____%%%%%%  |
  \____%%\%% /  %% %% %% / %% %%    %% %%%%%%%% %% /     %%  ___/
 %%\   %% %% |  %% %% %% | %% %%   %% /%%   ____%% |     %% |
 \%%%%%%  %%%%%%%  %% %% | %% %%%%%% / \%%%%%%%\\%%%%%%%\%%%%%%%\
  \______/%%  ____/\__\__| \__\_____/   \_______|\_______\_______|
          %% |
          %% |
          \__|
"""

TAGLINE = " Modelling the Phase Field of Spinoidal Decomposition\n"

HELP_TEXT = """\
usage: spindec [-h]
               [-c DEBUG]
               [-C CONFIRM]
               [-t]
               [-e]

options:
  -h, --help              show this help message and exit
  -c, --compile DEBUG     compile the code with optional debug option
                          (default=none)
  -C, --clean CONFIRM     remove compiled binaries from repository
                          (default=none)
  -t, --test              run automated unit tests
  -e, --example           run with example initialisation states
  -V, --version           show the version and exit

Values attach to their flag (-cd, --compile=debug, -Cc, --clean=confirm)
and only one argument may be given per invocation.
"""


def banner() -> str:
    """ASCII art followed by the project tagline."""
    return ASCII_ART + "\n" + TAGLINE
