# Copyright (c) 2023 Christophe Dufaza <chris@openmarl.org>
#
# SPDX-License-Identifier: Apache-2.0

"""Bootstrap setup.cfg for setuptools front-ends that still need a setup.py."""

from setuptools import setup  # type: ignore

if __name__ == "__main__":
    setup()
