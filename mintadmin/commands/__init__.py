"""mint-admin CLI commands"""
