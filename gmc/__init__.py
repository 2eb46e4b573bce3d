"""gmc: create Go modules so you can start coding ASAP."""

NAME = "gmc"
URL = "https://github.com/jbrudvik/gmc"
