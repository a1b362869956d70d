"""texpdf - compile LaTeX documents to PDF through texi2dvi."""
