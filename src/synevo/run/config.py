import configparser
import os
from synevo.activations import parse_squash

class Config:

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a default Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config holding the default values,
                         whose attributes can then be set manually.
        """
        if config_file is not None and not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        if config_file is not None:
            parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [POPULATION]

        # The number of units in the population (one per agent).
        self.max_units = get_value('POPULATION', 'max_units', int, default=10)

        # The number of top units (winners) carried unchanged into the next
        # generation and used as parents. Clamped to 'max_units' by the trainer,
        # and must be at least 2.
        self.top_units = get_value('POPULATION', 'top_units', int, default=4)

        # [NETWORK]

        # The number of neurons in the input, hidden and output layers.
        self.num_inputs  = get_value('NETWORK', 'num_inputs' , int, default=2)
        self.num_hidden  = get_value('NETWORK', 'num_hidden' , int, default=6)
        self.num_outputs = get_value('NETWORK', 'num_outputs', int, default=1)

        # The squashing function of hidden and output neurons.
        # Allowed values: LOGISTIC, TANH, IDENTITY, HLIM, RELU
        self.squash = parse_squash(get_value('NETWORK', 'squash', str, default='LOGISTIC'))

        # [MUTATION]

        # The probability of mutating each gene until a generation has been bred
        # successfully. While the mutation rate still has this value, a generation
        # whose best fitness is negative is discarded and replaced by a new one.
        self.initial_mutation_rate = get_value('MUTATION', 'initial_mutation_rate', float, default=1.0)

        # The probability of mutating each gene once a generation has been bred.
        self.mutation_rate = get_value('MUTATION', 'mutation_rate', float, default=0.2)

        # [INPUT]

        # The factor used to scale the normalized input values.
        self.scale_factor = get_value('INPUT', 'scale_factor', float, default=200.0)

        # The horizontal and vertical distances at which inputs saturate.
        self.max_dx = get_value('INPUT', 'max_dx', float, default=700.0)
        self.max_dy = get_value('INPUT', 'max_dy', float, default=800.0)

        # The agent acts when the network output exceeds this threshold.
        self.action_threshold = get_value('INPUT', 'action_threshold', float, default=0.5)

        # [TERMINATION]

        # The number of generations after which to stop a trial.
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int, default=50)

        # Whether to stop a trial as soon as the best fitness of a
        # generation meets or exceeds 'fitness_threshold'.
        self.fitness_termination_check = get_value('TERMINATION', 'fitness_termination_check', bool, default=False)
        self.fitness_threshold         = get_value('TERMINATION', 'fitness_threshold', float, default=None)
