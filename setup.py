from setuptools import find_packages, setup

__title__ = "compact_jwt"
__description__ = "Compact signed JSON Web Tokens, with HMAC, RSA and ECDSA signatures."
__url__ = "https://github.com/compact-jwt/compact_jwt"
__version__ = "0.1.0"
__author__ = "compact_jwt contributors"
__author_email__ = "compact-jwt@users.noreply.github.com"
__license__ = "Apache 2.0"
__copyright__ = "Copyright 2026 compact_jwt contributors"

with open("README.rst", "rt") as finput:
    readme = finput.read()

with open("requirements.txt", "rt") as finput:
    requires = [line.strip() for line in finput.readlines() if line.strip()]

setup(
    name=__title__,
    version=__version__,
    description=__description__,
    long_description=readme,
    long_description_content_type="text/x-rst",
    author=__author__,
    author_email=__author_email__,
    url=__url__,
    packages=find_packages(exclude=("tests",)),
    package_data={"": ["LICENSE", "requirements.txt"]},
    package_dir={"compact_jwt": "compact_jwt"},
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=requires,
    extras_require={"test": ["pytest", "freezegun", "pytest-freezer"]},
    license=__license__,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
    ],
    project_urls={"Source": "https://github.com/compact-jwt/compact_jwt",},
)
