"""
cronetkit: build cronet static libraries for every Go target and publish them
as a cgo module.
"""
