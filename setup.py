# type: ignore
import os

import setuptools

SOURCE_DIR = os.path.dirname(os.path.abspath(__file__))

try:
    with open(os.path.join(SOURCE_DIR, "README.md")) as f:
        long_description = f.read()
except FileNotFoundError:
    long_description = "**SETUP: README NOT FOUND**"


def read_version():
    # avoid importing the package (and its dependencies) at build time
    about = {}
    with open(os.path.join(SOURCE_DIR, "src", "checkignore", "__init__.py")) as f:
        exec(f.read(), about)
    return about["__VERSION__"]


install_requires = [
    # These specifiers are flexible so check-ignore can coexist with other
    # tools in the same virtualenv.
    "attrs>=21.3",
    "click~=8.1",
    "wcmatch~=8.3",
]

extras_require = {
    "test": [
        "pytest>=7.0",
        "pytest-mock>=3.10",
    ],
}

setuptools.setup(
    name="checkignore",
    version=read_version(),
    author="checkignore developers",
    description="Report which paths are excluded by gitignore rules, skipping paths tracked in the git index.",
    install_requires=install_requires,
    extras_require=extras_require,
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/checkignore/checkignore",
    packages=setuptools.find_packages(where="src"),
    package_dir={"": "src"},
    entry_points={"console_scripts": ["check-ignore=checkignore.main:main"]},
    classifiers=[
        "Environment :: Console",
        "License :: OSI Approved :: GNU Lesser General Public License v2 (LGPLv2)",
        "Operating System :: MacOS",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Version Control :: Git",
    ],
    python_requires=">=3.8",
    zip_safe=False,
)
