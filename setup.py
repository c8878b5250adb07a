from setuptools import setup, find_packages

# - Read version
exec(open("ctrnn/version.py").read())

setup_args = {
    "name": "ctrnn",
    "version": __version__,
    "packages": find_packages(include=["ctrnn", "ctrnn.*"]),
    "install_requires": ["numpy", "scipy"],
    "extras_require": {
        "tests": [
            "pytest>=6.0",
            "pytest-xdist>=3.2.1",
            "pytest-random-order>=1.1.0",
        ],
    },
    "description": "A Python package for simulating continuous-time recurrent neural networks of leaky-integrator neurons, for use as evolvable controllers",
    "long_description": open("README.md").read(),
    "long_description_content_type": "text/markdown",
    "classifiers": [
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
    ],
    "keywords": "CTRNN recurrent neural network leaky integrator evolutionary robotics",
    "python_requires": ">=3.8",
    "include_package_data": True,
}

setup(**setup_args)
