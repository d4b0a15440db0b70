from setuptools import setup, find_packages

with open('long_description.rst') as f:
  ld = f.read()

__version__ = eval(open('quickfqc/version.py').read().split('=')[1])
setup(
  name='quickfqc',
  version=__version__,
  description='Quick quality summaries from the first reads of FASTQ files',
  long_description=ld,
  keywords=['fastq', 'genomics', 'ngs', 'quality control', 'sequencing'],
  classifiers=[
    'Development Status :: 4 - Beta',
    'Intended Audience :: Science/Research',
    'Topic :: Scientific/Engineering :: Bio-Informatics',
    'License :: OSI Approved :: Apache Software License',
    'Programming Language :: Python :: 3',
  ],
  python_requires='>=3.8',
  packages=find_packages(include=['quickfqc*']),
  include_package_data=True,
  package_data={'quickfqc.test': ['data/*']},
  entry_points={'console_scripts': ['quickfqc = quickfqc.cli:cli']},
  install_requires=[
    'setuptools>=24.3.0',
    'numpy>=1.17.0',
    'click>=7.0',
    'matplotlib>=3.0.0',
    'pandas',
    'cytoolz'
  ],
  extras_require={'test': ['pytest']},
)
