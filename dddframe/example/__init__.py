"""A small hotel application built on the framework: hotel and auth contexts."""