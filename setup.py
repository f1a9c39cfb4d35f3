#!/usr/bin/env python

from setuptools import setup, find_packages

with open('requirements.txt') as f:
    requirements = f.read().splitlines()

setup(name='fuzz_launcher',
      version='0.1',
      description='Fuzz target launcher with stop-after-first-failure policy',
      install_requires=requirements,
      extras_require={
          'test': ['pytest'],
          },
      packages=find_packages(),
      package_data={'fuzz_launcher': ['config_default.yaml']},
      scripts = ['fuzz_launch.py'],
      python_requires='>=3.7',

	  classifiers=[
		  'Development Status :: 4 - Beta',
		  'Environment :: Console',
		  'Intended Audience :: Developers',
		  'License :: OSI Approved :: GNU Affero General Public License v3',
		  'Operating System :: POSIX :: Linux',
		  'Programming Language :: Python :: 3',
		  'Topic :: Security',
		  'Topic :: Software Development :: Testing',
		  ],
     )
