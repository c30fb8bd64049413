"""Parsers for the text output of jcmd and jstat."""