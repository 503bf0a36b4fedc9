# coding: utf-8


import os
from setuptools import setup

import sciround as sr


this_dir = os.path.dirname(os.path.abspath(__file__))


keywords = [
    "scientific", "numbers", "rounding", "uncertainties", "pdg", "latex", "typst", "gnuplot",
]


classifiers = [
    "Programming Language :: Python",
    "Programming Language :: Python :: 3",
    "Development Status :: 4 - Beta",
    "Operating System :: OS Independent",
    "License :: OSI Approved :: BSD License",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Information Technology",
]


# read the readme file
with open(os.path.join(this_dir, "README.md"), "r") as f:
    long_description = f.read()


# load installation requirements
with open(os.path.join(this_dir, "requirements.txt"), "r") as f:
    install_requires = [
        line.strip() for line in f.readlines()
        if line.strip() and not line.strip().startswith("#")
    ]


# optional integrations
extras_require = {
    "numpy": ["numpy"],
    "uncertainties": ["uncertainties"],
    "yaml": ["pyyaml"],
}
extras_require["test"] = sorted(set(sum(extras_require.values(), [])))


setup(
    name=sr.__name__,
    version=sr.__version__,
    author=sr.__author__,
    description=sr.__doc__.strip().split("\n")[0].strip(),
    license=sr.__license__,
    keywords=keywords,
    classifiers=classifiers,
    long_description=long_description,
    long_description_content_type="text/markdown",
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires=">=3.7",
    zip_safe=False,
    packages=[sr.__name__],
    entry_points={
        "console_scripts": ["sciround = sciround.__main__:main"],
    },
)
