"""
texpdf - LaTeX to PDF through texi2dvi
"""

from .compile import compile_many, compile_to_pdf, tex_to_pdf
from .context import Console, Context
from .runner import InvocationPlan, InvocationResult, ProcessRunner
