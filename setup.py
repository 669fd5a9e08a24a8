"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='lang-script',
	version='0.1.0',
	packages=['lang'],
	entry_points={
		'console_scripts': ["lang = lang.cmdline:main"],
	},
	license='MIT',
	description='A small embedded scripting language with a tree-walking evaluator',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Environment :: Console",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
