"""Setup script for evalmatrix."""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / "evalmatrix" / "README.md"
if readme_file.exists():
    long_description = readme_file.read_text()
else:
    long_description = "evalmatrix: Confusion matrices and classification metrics"

# Read requirements
requirements_file = Path(__file__).parent / "requirements.txt"
if requirements_file.exists():
    requirements = requirements_file.read_text().strip().split('\n')
else:
    requirements = [
        'numpy>=1.20.0',
        'pandas>=1.3.0',
        'scikit-learn>=1.0.0',
        'matplotlib>=3.4.0',
        'seaborn>=0.11.0',
        'pyyaml>=5.4.0',
    ]

# Optional dependencies
extras_require = {
    'dev': ['pytest', 'black', 'flake8'],
}

setup(
    name='evalmatrix',
    version='0.1.0',
    description='Confusion matrices and classification metrics for model evaluation',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*', 'examples', 'docs']),
    install_requires=requirements,
    extras_require=extras_require,
    entry_points={
        'console_scripts': [
            'evalmatrix=evalmatrix.cli.main:main',
        ],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Artificial Intelligence',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
    python_requires='>=3.8',
)
