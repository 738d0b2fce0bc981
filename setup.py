#!/usr/bin/env python

from setuptools import setup, find_packages
import wwwauth

setup(name='wwwauth',
      version=wwwauth.__version__,
      description='Parse, check and serialise HTTP authentication challenges.',
      long_description=open("README.md").read(),
      long_description_content_type="text/markdown",
      license = "MIT",
      packages=find_packages(exclude=["test", "test.*"]),
      package_dir={'wwwauth': 'wwwauth'},
      scripts=['bin/wwwauth'],
      python_requires=">=3.7",
      install_requires=[
          'thor >= 0.8.0',
          'markdown >= 2.6.5',
          'markupsafe >= 2.0',
          'netaddr >= 0.10.0',
          'typing_extensions >= 3.7.4'
      ],
      extras_require={
          'dev': [
          'mypy',
          'pytest'
          ]
      },
      classifiers=[
        'Programming Language :: Python :: 3',
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Environment :: Web Environment',
        'Topic :: Internet :: WWW/HTTP',
        'Operating System :: Unix',
        'Operating System :: MacOS :: MacOS X',
        'License :: OSI Approved :: MIT License',
      ],
)
