"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='weasel-types',
	author='Beth Kjos',
	author_email='kjosib@gmail.com',
	version='0.1.0',
	packages=['weasel', ],
	entry_points={
		'console_scripts': ["weasel = weasel.cmdline:main"],
	},
	license='MIT',
	description='Hindley-Milner type inference for a tiny functional expression language',
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Compilers",
		"Topic :: Education",
		"Environment :: Console",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
	extras_require={
		'test': ["pytest"],
	},
)
