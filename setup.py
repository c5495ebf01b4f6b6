#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(name = 'fish-interpreter',
      version = '0.1.0',
      description = '><> interpreter.',
      author = 'Delfad0r',
      author_email = 'filippo.gianni.baroni@gmail.com',
      license = 'LGPL3',
      packages = find_packages(exclude = ['tests']),
      python_requires = '>=3.6',
      extras_require = {
          'test' : ['pytest']
      },
      entry_points = {
          'console_scripts' : [
              'fish=fish.fish:main'
          ]
      })
