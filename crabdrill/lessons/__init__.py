"""Worked reference solutions to part of the course exercises."""