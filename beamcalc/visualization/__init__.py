from .section_plot import plot_cross_section, plot_strain_diagram

__all__ = ['plot_cross_section', 'plot_strain_diagram']
