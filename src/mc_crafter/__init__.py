"""Recipe planning and single-flight gather/craft execution for a Minecraft agent."""

__version__ = "0.1.0"
