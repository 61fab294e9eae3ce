import os
from os.path import *


def load(path, cache={}):
	if path == None:
		print "no path given"
		return
	try:
		data = open(path).read()
	except:
		print "failed to read", path
	if cache.get(path) == True:
		return cache[path]
	# TODO: stream large files
	return eval(data)
