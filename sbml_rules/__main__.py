from .cli import sbml_rules

if __name__ == "__main__":  # pragma: no cover
    sbml_rules()
