# This file is part of the bigsss project
# https://github.com/mbarkhau/bigsss
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

import os
import setuptools


def project_path(*sub_paths):
    project_dirpath = os.path.abspath(os.path.dirname(__file__))
    return os.path.join(project_dirpath, *sub_paths)


def read(*sub_paths):
    with open(project_path(*sub_paths), mode="rb") as fobj:
        return fobj.read().decode("utf-8")


def read_requirements(filename):
    return [
        line.strip()
        for line in read("requirements", filename).splitlines()
        if line.strip() and not line.startswith("#")
    ]


install_requires = read_requirements("pypi.txt")

tests_require = read_requirements("test.txt")


long_description = "\n\n".join((read("README.md"), read("CHANGELOG.md")))


setuptools.setup(
    name="bigsss",
    license="MIT",
    author="Manuel Barkhau",
    author_email="mbarkhau@gmail.com",
    url="https://github.com/mbarkhau/bigsss",
    version="2022.1009b0",
    keywords="ssss shamir split share secret lagrange charset",
    description="Shamir Secret Sharing for big integers and strings.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=["bigsss"],
    package_dir={"": "src"},
    zip_safe=True,
    python_requires=">=3.8",
    install_requires=install_requires,
    extras_require={"test": tests_require},
    entry_points="""
        [console_scripts]
        bigsss=bigsss.cli:cli
    """,

    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: Unix",
        "Operating System :: POSIX",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
        "Topic :: Software Development :: Libraries",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
