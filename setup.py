from setuptools import find_packages, setup

setup(
  name="edsig",
  author="Edsig developers",
  description="Ed25519 signatures in plain Python",
  long_description=open("README.md").read(),
  long_description_content_type="text/markdown",
  version="0.1.0",
  packages=find_packages(exclude=["tests"]),
  python_requires=">=3.9",
  classifiers=[
    "Programming Language :: Python :: 3",
    "License :: OSI Approved :: MIT License",
    "Operating System :: OS Independent",
    "Topic :: Security :: Cryptography",
  ],
  install_requires=[
    "colorama>=0.4",
    "pynacl>=1.4",
    "tqdm>=4.62",
  ],
  extras_require={
    "test": ["pytest", "pytest-sugar", "pytest-mock", "coverage", "mypy", "bandit", "cryptography>=35"],
    "dev": ["tox", "isort", "yapf"],
  },
  include_package_data=True,
  entry_points=dict(console_scripts=["edsig = edsig.__main__:main"],),
)
